"""Time and week helpers shared by the resolver, layout and renderers.

Hours are 24-hour integers and weeks start on Monday (day index 0).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, List

MINUTES_PER_HOUR = 60
DAYS_PER_WEEK = 7
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def minutes_of_day(hour: int, minute: int) -> int:
    return hour * MINUTES_PER_HOUR + minute


def decimal_hours(hour: int, minute: int) -> float:
    # 9:30 -> 9.5
    return hour + minute / MINUTES_PER_HOUR


def duration_minutes(start_hour: int, start_minute: int, end_hour: int, end_minute: int) -> int:
    return minutes_of_day(end_hour, end_minute) - minutes_of_day(start_hour, start_minute)


def now_decimal(now: datetime) -> float:
    return decimal_hours(now.hour, now.minute)


def parse_int(value: Any) -> int | None:
    """Best-effort integer parse for loosely typed store values.

    Ints and floats truncate; strings yield their leading integer, so
    ``"09"``, ``"9.0"`` and ``"9h"`` all give 9. Booleans and values with no
    leading digits yield ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):  # NaN / inf
            return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_bounded_int(value: Any, low: int, high: int, default: int) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < low or parsed > high:
        return default
    return parsed


# ---------------------------------------------------------------------------
# Weeks
# ---------------------------------------------------------------------------


def week_start(d: date | datetime) -> date:
    if isinstance(d, datetime):
        d = d.date()
    return d - timedelta(days=d.weekday())


def week_days(d: date | datetime) -> List[date]:
    monday = week_start(d)
    return [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def shift_week(d: date | datetime, weeks: int) -> date:
    return week_start(d) + timedelta(weeks=weeks)


def is_today(d: date, today: date | None = None) -> bool:
    return d == (today or date.today())


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_time(hour: int, minute: int = 0) -> str:
    ampm = "PM" if hour >= 12 else "AM"
    h12 = hour % 12 or 12
    return f"{h12}:{minute:02d} {ampm}"


def format_hour(hour: int) -> str:
    return format_time(hour, 0)


def format_day(d: date) -> str:
    return d.strftime("%a")


def format_date(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def format_week_range(d: date | datetime) -> str:
    days = week_days(d)
    first, last = days[0], days[-1]
    return f"{format_date(first)} - {format_date(last)}, {last.year}"


def hour_labels(start_hour: int, end_hour: int) -> List[str]:
    return [format_hour(h) for h in range(start_hour, end_hour)]

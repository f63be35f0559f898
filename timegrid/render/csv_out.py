from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List

from ..models import ScheduleEvent
from ..timemath import format_time

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
HEADER = ["Day", "Start", "End", "Course", "Title", "Teacher", "Location"]


def day_name(day: int) -> str:
    return DAY_NAMES[day] if 0 <= day < len(DAY_NAMES) else f"Day {day}"


def events_csv(events: Iterable[ScheduleEvent]) -> str:
    rows: List[ScheduleEvent] = sorted(
        events, key=lambda e: (e.day, e.start_decimal, e.end_decimal, e.course, e.id)
    )
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    for e in rows:
        writer.writerow(
            [
                day_name(e.day),
                format_time(e.start_time, e.start_minute),
                format_time(e.end_time, e.end_minute),
                e.course,
                e.title,
                e.teacher,
                e.location,
            ]
        )
    return buf.getvalue()


def write_events_csv(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "schedule.csv"
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    return out_path

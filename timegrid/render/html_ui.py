from __future__ import annotations

from datetime import date
from html import escape
from pathlib import Path
from typing import List

from ..colors import pastel
from ..config import GridConfig
from ..models import PositionedBlock
from ..timemath import format_day, format_date, format_week_range, hour_labels, is_today, week_days


def _px(value: float) -> str:
    return f"{value:.1f}px"


def block_html(b: PositionedBlock) -> str:
    e = b.event
    style = (
        f"top:{_px(b.top)};height:{_px(b.height)};left:{_px(b.left)};width:{_px(b.width)};"
        f"background:{pastel(e.color)};border-left:4px solid {e.color}"
    )
    return (
        f"<div class='event' data-id='{escape(e.id)}' style=\"{style}\">"
        f"<div class='title'>{escape(e.title)}</div>"
        f"<div class='detail'>{escape(e.time_range_label())}</div>"
        f"<div class='detail'>{escape(e.teacher)}</div>"
        f"<div class='detail'>{escape(e.location)}</div>"
        f"</div>"
    )


def _day_head(d: date, left: float, width: float, height: float, today: bool) -> str:
    css = "day-head today" if today else "day-head"
    return (
        f"<div class='{css}' style='left:{_px(left)};width:{_px(width)};height:{_px(height)}'>"
        f"{format_day(d)}<br/><span class='date'>{format_date(d)}</span></div>"
    )


def build_html(
    blocks: List[PositionedBlock],
    grid: GridConfig,
    week: date,
    marker: float | None = None,
    today: date | None = None,
) -> str:
    days = week_days(week)
    col = grid.column_width
    labels = hour_labels(grid.start_hour, grid.end_hour)
    total_height = grid.header_height_px + len(labels) * grid.pixels_per_hour

    headers = "".join(
        _day_head(d, grid.time_column_width_px + i * col, col, grid.header_height_px, is_today(d, today))
        for i, d in enumerate(days[: grid.day_column_count])
    )
    rows = "".join(
        f"<div class='hour' style='top:{_px(grid.header_height_px + i * grid.pixels_per_hour)};"
        f"height:{_px(grid.pixels_per_hour)}'><span>{label}</span></div>"
        for i, label in enumerate(labels)
    )
    now_line = f"<div class='now' style='top:{_px(marker)}'></div>" if marker is not None else ""
    events = "".join(block_html(b) for b in blocks)

    style = f"""
    <style>
    body {{ font-family: system-ui, Arial, sans-serif; margin: 20px; color: #222; }}
    .week {{ position: relative; width: {_px(grid.available_width_px)}; height: {_px(total_height)}; }}
    .day-head {{ position: absolute; top: 0; text-align: center; font-weight: 600; }}
    .day-head .date {{ font-size: 11px; color: #666; font-weight: 400; }}
    .day-head.today {{ color: #1565c0; }}
    .hour {{ position: absolute; left: 0; right: 0; border-top: 1px solid #eee; }}
    .hour span {{ font-size: 11px; color: #666; }}
    .event {{ position: absolute; box-sizing: border-box; padding: 4px 6px; overflow: hidden; font-size: 12px; }}
    .event .title {{ font-weight: 600; }}
    .now {{ position: absolute; left: {_px(grid.time_column_width_px)}; right: 0; border-top: 2px solid #e53935; }}
    </style>
    """

    return (
        "<html><head><meta charset='utf-8'><title>Weekly Schedule</title>" + style + "</head><body>"
        f"<h1>Schedule</h1><p>{escape(format_week_range(week))}</p>"
        f"<div class='week'>{headers}{rows}{events}{now_line}</div>"
        "</body></html>"
    )


def write_html_ui(
    blocks: List[PositionedBlock],
    grid: GridConfig,
    week: date,
    outputs_dir: Path,
    marker: float | None = None,
    today: date | None = None,
) -> Path:
    ui_dir = outputs_dir / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)
    out_path = ui_dir / "index.html"
    out_path.write_text(build_html(blocks, grid, week, marker, today), encoding="utf-8")
    return out_path

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, List, Sequence

from ..config import GridConfig
from ..layout.grid import WeekGridLayoutEngine
from ..models import ScheduleEvent
from ..render.csv_out import day_name
from ..timemath import MINUTES_PER_HOUR


def validate_events(
    events: Sequence[ScheduleEvent],
    grid: GridConfig,
    *,
    teacher_unknown: str = "N/A",
) -> Dict[str, object]:
    report: Dict[str, object] = {"event_count": len(events)}
    engine = WeekGridLayoutEngine(grid)

    report["out_of_range_days"] = [f"{e.id} day={e.day}" for e in events if not engine.has_valid_day(e)]
    report["floored_durations"] = [e.id for e in events if e.duration_minutes <= 0]

    # Positive-duration lessons too short to be drawn at their true height
    min_height: List[str] = []
    for e in events:
        if e.duration_minutes > 0:
            natural = e.duration_minutes / MINUTES_PER_HOUR * grid.pixels_per_hour
            if natural < grid.min_block_height_px:
                min_height.append(e.id)
    report["min_height_blocks"] = min_height

    report["outside_grid_hours"] = [
        e.id for e in events if e.start_decimal < grid.start_hour or e.end_decimal > grid.end_hour
    ]
    report["teacher_unknown"] = [e.id for e in events if e.teacher == teacher_unknown]

    # Same-day overlaps are drawn on top of each other; report them only
    by_day: Dict[int, List[ScheduleEvent]] = defaultdict(list)
    for e in events:
        if engine.has_valid_day(e):
            by_day[e.day].append(e)
    overlaps: List[str] = []
    for day, day_events in sorted(by_day.items()):
        ordered = sorted(day_events, key=lambda x: (x.start_decimal, x.end_decimal))
        for i, a in enumerate(ordered):
            a_end = a.end_decimal
            if a.duration_minutes <= 0:
                a_end = a.start_decimal + grid.floor_duration_minutes / MINUTES_PER_HOUR
            for b in ordered[i + 1 :]:
                if b.start_decimal >= a_end:
                    break
                overlaps.append(f"{day_name(day)}: {a.id} / {b.id}")
    report["overlaps"] = overlaps

    report["courses"] = dict(sorted(Counter(e.course for e in events).items()))
    return report

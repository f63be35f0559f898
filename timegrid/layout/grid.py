from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from ..config import GridConfig
from ..models import PositionedBlock, ScheduleEvent
from ..timemath import MINUTES_PER_HOUR


def filter_events(events: Iterable[ScheduleEvent], course: str | None) -> List[ScheduleEvent]:
    if not course:
        return list(events)
    return [e for e in events if e.course == course]


class WeekGridLayoutEngine:
    """Maps ScheduleEvents onto the pixel geometry of a week grid.

    Overlapping events on the same day share a column and simply stack in
    paint order; no sub-column packing is attempted.
    """

    def __init__(self, grid: GridConfig):
        self.grid = grid

    def has_valid_day(self, event: ScheduleEvent) -> bool:
        return 0 <= event.day < self.grid.day_column_count

    def block_height(self, event: ScheduleEvent) -> float:
        g = self.grid
        minutes = event.duration_minutes
        if minutes <= 0:
            # End at or before start in the source data
            minutes = g.floor_duration_minutes
        return max(minutes / MINUTES_PER_HOUR * g.pixels_per_hour, g.min_block_height_px)

    def position(self, event: ScheduleEvent) -> PositionedBlock:
        g = self.grid
        col = g.column_width
        return PositionedBlock(
            event=event,
            top=g.header_height_px + (event.start_decimal - g.start_hour) * g.pixels_per_hour,
            height=self.block_height(event),
            left=g.time_column_width_px + event.day * col,
            width=max(col - g.block_padding_px, 0.0),
        )

    def layout(self, events: Sequence[ScheduleEvent], filter_course: str | None = None) -> List[PositionedBlock]:
        logger = logging.getLogger(__name__)
        blocks: List[PositionedBlock] = []
        for e in filter_events(events, filter_course):
            if not self.has_valid_day(e):
                logger.warning(f"Skipping event {e.id} ({e.course}): day {e.day} outside grid columns")
                continue
            blocks.append(self.position(e))
        return blocks


def layout(
    events: Sequence[ScheduleEvent],
    grid: GridConfig,
    filter_course: str | None = None,
) -> List[PositionedBlock]:
    return WeekGridLayoutEngine(grid).layout(events, filter_course)

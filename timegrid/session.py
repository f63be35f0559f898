from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Callable, List, Tuple

from .config import GridConfig
from .layout.grid import WeekGridLayoutEngine
from .layout.marker import get_current_time_marker_position, run_marker_ticker
from .models import PositionedBlock, ScheduleEvent
from .resolve.merge import unique_courses
from .resolve.resolver import Failure, Resolved, ScheduleDataResolver

# Changing any of these invalidates the cached block layout
_LAYOUT_INPUTS = {"events", "filter_course", "grid"}


@dataclass(frozen=True)
class ScheduleState:
    subject_id: str | None = None
    week_start: date | None = None
    events: Tuple[ScheduleEvent, ...] = ()
    failure: Failure | None = None
    filter_course: str | None = None
    grid: GridConfig = field(default_factory=GridConfig)


class ScheduleSession:
    """Single owner of the schedule view state for one viewer.

    The state is an immutable snapshot swapped in one assignment, so readers
    (layout, marker tick) never see a half-updated event list. Only the
    most recent load request may publish its result, whatever order the
    loads finish in.
    """

    def __init__(self, resolver: ScheduleDataResolver, grid: GridConfig | None = None):
        self.resolver = resolver
        self._state = ScheduleState(grid=grid or GridConfig())
        self._selected: str | None = None
        # Bumped by every select() and load(); older requests see a newer value
        self._generation = 0
        self._blocks: List[PositionedBlock] | None = None
        self.layout_runs = 0

    @property
    def state(self) -> ScheduleState:
        return self._state

    @property
    def selected(self) -> str | None:
        return self._selected

    def _replace(self, **changes: object) -> None:
        self._state = replace(self._state, **changes)
        if _LAYOUT_INPUTS & set(changes):
            self._blocks = None

    def select(self, subject_id: str | None) -> None:
        subject_id = subject_id or None
        if subject_id == self._selected:
            return
        self._selected = subject_id
        self._generation += 1
        self._replace(subject_id=subject_id, week_start=None, events=(), failure=None)

    async def load(self, week: date | None = None) -> Resolved | Failure | None:
        logger = logging.getLogger(__name__)
        subject_id = self._selected
        if not subject_id:
            logger.debug("No subject selected; skipping schedule load")
            return None
        self._generation += 1
        generation = self._generation
        result = await self.resolver.resolve(subject_id, week)
        if generation != self._generation or self._selected != subject_id:
            logger.info(f"Discarding stale schedule for {subject_id}; a newer request superseded it")
            return None
        if isinstance(result, Failure):
            self._replace(events=(), failure=result)
        else:
            self._replace(events=result.events, week_start=result.week_start, failure=None)
        return result

    def set_filter(self, course: str | None) -> None:
        course = course or None
        if course != self._state.filter_course:
            self._replace(filter_course=course)

    def resize(self, width: float) -> None:
        if float(width) != self._state.grid.available_width_px:
            self._replace(grid=self._state.grid.with_width(width))

    def courses(self) -> List[str]:
        return unique_courses(self._state.events)

    def blocks(self) -> List[PositionedBlock]:
        if self._blocks is None:
            state = self._state
            self._blocks = WeekGridLayoutEngine(state.grid).layout(state.events, state.filter_course)
            self.layout_runs += 1
        return self._blocks

    def tick(self, now: datetime | None = None) -> float | None:
        return get_current_time_marker_position(self._state.grid, now)

    async def run_ticker(
        self,
        on_tick: Callable[[float | None], None],
        *,
        interval: float = 30.0,
        clock: Callable[[], datetime] = datetime.now,
        stop: asyncio.Event | None = None,
        max_ticks: int | None = None,
    ) -> int:
        return await run_marker_ticker(
            self.tick, on_tick, interval=interval, clock=clock, stop=stop, max_ticks=max_ticks
        )

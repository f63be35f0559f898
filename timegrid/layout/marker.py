from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable

from ..config import GridConfig
from ..timemath import now_decimal


def get_current_time_marker_position(grid: GridConfig, now: datetime | None = None) -> float | None:
    """Vertical offset of the "now" line, or None outside [start_hour, end_hour).

    Always derived from the given wall-clock time; nothing is carried over
    between calls.
    """
    t = now_decimal(now or datetime.now())
    if not grid.start_hour <= t < grid.end_hour:
        return None
    return grid.header_height_px + (t - grid.start_hour) * grid.pixels_per_hour + grid.marker_nudge_px


def scroll_offset_for(grid: GridConfig, now: datetime | None = None) -> float | None:
    # Keep one hour of context above the current time
    t = now_decimal(now or datetime.now())
    if not grid.start_hour <= t < grid.end_hour:
        return None
    return max((t - grid.start_hour - 1) * grid.pixels_per_hour, 0.0)


async def run_marker_ticker(
    read_position: Callable[[datetime], float | None],
    on_tick: Callable[[float | None], None],
    *,
    interval: float = 30.0,
    clock: Callable[[], datetime] = datetime.now,
    stop: asyncio.Event | None = None,
    max_ticks: int | None = None,
) -> int:
    """Publish the marker position immediately and then every ``interval`` seconds.

    Returns the number of ticks delivered once ``stop`` is set or
    ``max_ticks`` is reached.
    """
    ticks = 0
    while True:
        on_tick(read_position(clock()))
        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            return ticks
        if stop is None:
            await asyncio.sleep(interval)
            continue
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
            return ticks
        except asyncio.TimeoutError:
            pass

from .grid import WeekGridLayoutEngine, filter_events, layout
from .marker import get_current_time_marker_position, run_marker_ticker, scroll_offset_for

__all__ = [
    "WeekGridLayoutEngine",
    "filter_events",
    "get_current_time_marker_position",
    "layout",
    "run_marker_ticker",
    "scroll_offset_for",
]

from .assignments import assignment_keys, resolve_assignments
from .merge import build_event, unique_courses
from .resolver import Failure, Resolved, ScheduleDataResolver

__all__ = [
    "Failure",
    "Resolved",
    "ScheduleDataResolver",
    "assignment_keys",
    "build_event",
    "resolve_assignments",
    "unique_courses",
]

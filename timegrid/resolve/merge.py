from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple

from ..colors import course_color
from ..config import Labels
from ..models import AssignmentKey, ScheduleEvent, TeacherAssignment, TimetableSlot
from ..timemath import parse_bounded_int, parse_int

DEFAULT_START_HOUR = 9
DEFAULT_END_HOUR = 10
DEFAULT_MINUTE = 0
DEFAULT_DAY = 0


def _field(slot: TimetableSlot, name: str, raw: Any, low: int, high: int, default: int) -> int:
    value = parse_bounded_int(raw, low, high, default)
    if raw is None:
        logging.getLogger(__name__).debug(f"Slot {slot.id}: {name} missing; using {default}")
    elif value == default and parse_int(raw) != default:
        logging.getLogger(__name__).warning(
            f"Slot {slot.id}: {name}={raw!r} outside {low}..{high}; using {default}"
        )
    return value


def normalize_times(slot: TimetableSlot) -> Tuple[int, int, int, int]:
    return (
        _field(slot, "start_hour", slot.start_hour, 0, 23, DEFAULT_START_HOUR),
        _field(slot, "start_minute", slot.start_minute, 0, 59, DEFAULT_MINUTE),
        _field(slot, "end_hour", slot.end_hour, 0, 23, DEFAULT_END_HOUR),
        _field(slot, "end_minute", slot.end_minute, 0, 59, DEFAULT_MINUTE),
    )


def normalize_day(slot: TimetableSlot) -> int:
    # Out-of-range integers pass through; the layout pass drops them
    day = parse_int(slot.day)
    if day is None:
        if slot.day is not None:
            logging.getLogger(__name__).warning(f"Slot {slot.id}: unparseable day {slot.day!r}; using {DEFAULT_DAY}")
        return DEFAULT_DAY
    if not 0 <= day <= 6:
        logging.getLogger(__name__).warning(f"Slot {slot.id}: day {day} outside 0..6")
    return day


def build_event(
    slot: TimetableSlot,
    index: int,
    assignments: Dict[AssignmentKey, TeacherAssignment],
    labels: Labels,
) -> ScheduleEvent:
    start_h, start_m, end_h, end_m = normalize_times(slot)
    course = slot.subject_name or labels.course_unknown
    title = slot.title or slot.subject_name or labels.course_unknown
    assignment = None
    if slot.class_id and slot.subject_id:
        assignment = assignments.get((slot.class_id, slot.subject_id))
    teacher = assignment.teacher_name if assignment else labels.teacher_unknown
    return ScheduleEvent(
        id=slot.id or str(index + 1),
        title=title,
        course=course,
        day=normalize_day(slot),
        start_time=start_h,
        start_minute=start_m,
        end_time=end_h,
        end_minute=end_m,
        teacher=teacher,
        location=slot.location or labels.location_unknown,
        color=course_color(course),
    )


def unique_courses(events: Iterable[ScheduleEvent]) -> List[str]:
    return sorted({e.course for e in events})

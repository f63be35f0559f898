# Re-export common types
from .assignment import AssignmentKey, TeacherAssignment
from .block import PositionedBlock
from .event import ScheduleEvent
from .slot import Enrollment, TimetableSlot

__all__ = [
    "AssignmentKey",
    "Enrollment",
    "PositionedBlock",
    "ScheduleEvent",
    "TeacherAssignment",
    "TimetableSlot",
]

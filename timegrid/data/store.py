from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from ..models import Enrollment, TeacherAssignment, TimetableSlot


class StoreError(RuntimeError):
    """A query against the backing store failed outright."""


@runtime_checkable
class ScheduleStore(Protocol):
    """Read-only queries the resolver needs from the school data store."""

    async def get_enrolled_classes(self, subject_id: str) -> List[Enrollment]:
        ...

    async def get_timetable_slots(self, class_ids: Sequence[str]) -> List[TimetableSlot]:
        ...

    async def get_teacher_assignment(self, class_id: str, subject_id: str) -> TeacherAssignment | None:
        ...

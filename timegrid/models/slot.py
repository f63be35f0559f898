from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


def _first(row: Dict[str, Any], *names: str) -> Any:
    for n in names:
        if n in row and row[n] is not None:
            return row[n]
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


@dataclass(frozen=True)
class Enrollment:
    subject_id: str
    class_id: str


@dataclass(frozen=True)
class TimetableSlot:
    # Numeric fields are kept as delivered by the store; the resolver clamps them.
    id: str | None
    class_id: str | None
    subject_id: str | None
    day: Any = None
    start_hour: Any = None
    start_minute: Any = None
    end_hour: Any = None
    end_minute: Any = None
    title: str | None = None
    subject_name: str | None = None
    location: str | None = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TimetableSlot":
        subject = row.get("subjects")
        if isinstance(subject, list):
            subject = subject[0] if subject else None
        subject_name = _first(row, "subject_name", "subjectName")
        if subject_name is None and isinstance(subject, dict):
            subject_name = subject.get("subjectname") or subject.get("name")
        return cls(
            id=_text(row.get("id")),
            class_id=_text(_first(row, "class_id", "classId", "classid")),
            subject_id=_text(_first(row, "subject_id", "subjectId", "subjectid")),
            day=row.get("day"),
            start_hour=_first(row, "start_hour", "startHour", "start_time", "startTime"),
            start_minute=_first(row, "start_minute", "startMinute"),
            end_hour=_first(row, "end_hour", "endHour", "end_time", "endTime"),
            end_minute=_first(row, "end_minute", "endMinute"),
            title=_text(row.get("title")),
            subject_name=_text(subject_name),
            location=_text(row.get("location")),
        )

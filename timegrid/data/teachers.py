from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..models import AssignmentKey, TeacherAssignment


@dataclass
class TeacherRecord:
    id: str
    first_name: str
    last_name: str

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class TeacherDirectory:
    def __init__(self, data: Dict[str, object]):
        self.records: Dict[str, TeacherRecord] = {}
        for t in data.get("teachers", []):
            tid = str(t.get("id", "")).strip()
            if not tid:
                continue
            self.records[tid] = TeacherRecord(
                id=tid,
                first_name=(t.get("firstName") or "").strip(),
                last_name=(t.get("lastName") or "").strip(),
            )

        # (class_id, subject_id) -> teacher id, first row wins like a maybeSingle() query
        self.assignments: Dict[AssignmentKey, str] = {}
        for row in data.get("class_teachers", []):
            key = (str(row.get("classid", "")), str(row.get("subjectid", "")))
            if not all(key):
                continue
            self.assignments.setdefault(key, str(row.get("teacherid", "")))

    def teacher_for(self, class_id: str, subject_id: str) -> TeacherAssignment | None:
        tid = self.assignments.get((class_id, subject_id))
        if tid is None:
            return None
        rec = self.records.get(tid)
        # Assignment without a named user still carries the teacher id
        name = rec.name if rec else ""
        return TeacherAssignment(teacher_name=name, teacher_id=tid or None)

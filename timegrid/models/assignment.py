from dataclasses import dataclass
from typing import Tuple


AssignmentKey = Tuple[str, str]  # (class_id, subject_id)


@dataclass(frozen=True)
class TeacherAssignment:
    teacher_name: str
    teacher_id: str | None = None

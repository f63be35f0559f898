from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..models import Enrollment, TeacherAssignment, TimetableSlot
from .store import StoreError
from .teachers import TeacherDirectory


def load_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise StoreError(f"Cannot read {path.name}: {exc}") from exc


class JsonScheduleStore:
    """ScheduleStore backed by the JSON tables under ``<root>/data``.

    Every query re-reads its table off the event loop thread, so edits to the
    files are picked up by the next resolution pass.
    """

    def __init__(self, root: Path | str, *, child_unknown: str = "Unknown Child"):
        self.data_dir = Path(root) / "data"
        self.child_unknown = child_unknown

    async def _table(self, name: str) -> Dict[str, Any]:
        return await asyncio.to_thread(load_json, self.data_dir / f"{name}.json")

    async def get_enrolled_classes(self, subject_id: str) -> List[Enrollment]:
        data = await self._table("enrollments")
        seen: set[str] = set()
        out: List[Enrollment] = []
        for row in data.get("class_students", []):
            if str(row.get("studentid")) != subject_id:
                continue
            cid = str(row.get("classid") or "").strip()
            if cid and cid not in seen:
                seen.add(cid)
                out.append(Enrollment(subject_id=subject_id, class_id=cid))
        logging.getLogger(__name__).debug(f"{subject_id} enrolled in {[e.class_id for e in out]}")
        return out

    async def get_timetable_slots(self, class_ids: Sequence[str]) -> List[TimetableSlot]:
        wanted = set(class_ids)
        data = await self._table("timetable")
        subjects = await self._table("subjects")
        names = {
            str(s.get("id")): s.get("subjectname")
            for s in subjects.get("subjects", [])
            if s.get("id") is not None
        }
        out: List[TimetableSlot] = []
        for row in data.get("timetable", []):
            if str(row.get("classId")) not in wanted:
                continue
            row = dict(row)
            sid = row.get("subjectId")
            if sid is not None and "subjects" not in row and str(sid) in names:
                row["subjects"] = {"id": sid, "subjectname": names[str(sid)]}
            out.append(TimetableSlot.from_row(row))
        return out

    async def get_teacher_assignment(self, class_id: str, subject_id: str) -> TeacherAssignment | None:
        data = await self._table("teachers")
        return TeacherDirectory(data).teacher_for(class_id, subject_id)

    async def get_children(self, parent_id: str) -> List[Dict[str, str]]:
        data = await self._table("students")
        children: List[Dict[str, str]] = []
        for s in data.get("students", []):
            if str(s.get("parent_id")) != parent_id:
                continue
            name = f"{s.get('firstName') or ''} {s.get('lastName') or ''}".strip()
            children.append({"id": str(s.get("id")), "name": name or self.child_unknown})
        return children

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List

from ..config import Labels, ResolverSettings
from ..data.store import ScheduleStore
from ..models import AssignmentKey, TeacherAssignment, TimetableSlot


def assignment_keys(slots: Iterable[TimetableSlot]) -> List[AssignmentKey]:
    """Distinct (class_id, subject_id) pairs in first-seen order.

    Slots missing either id cannot be resolved and are left out.
    """
    seen: Dict[AssignmentKey, None] = {}
    for s in slots:
        if not s.class_id or not s.subject_id:
            continue
        seen.setdefault((s.class_id, s.subject_id), None)
    return list(seen)


async def lookup_assignment(
    store: ScheduleStore,
    key: AssignmentKey,
    settings: ResolverSettings,
    labels: Labels,
) -> TeacherAssignment:
    logger = logging.getLogger(__name__)
    unknown = TeacherAssignment(labels.teacher_unknown)
    timeout = settings.lookup_timeout_s if settings.lookup_timeout_s > 0 else None
    attempts = 1 + max(0, settings.lookup_retries)
    class_id, subject_id = key
    for attempt in range(1, attempts + 1):
        try:
            found = await asyncio.wait_for(
                store.get_teacher_assignment(class_id, subject_id), timeout=timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Teacher lookup {class_id}/{subject_id} timed out (attempt {attempt}/{attempts})")
            continue
        except Exception as exc:
            logger.warning(f"Teacher lookup {class_id}/{subject_id} failed (attempt {attempt}/{attempts}): {exc}")
            continue
        if found is None:
            logger.debug(f"No teacher assigned to {class_id}/{subject_id}")
            return unknown
        if not (found.teacher_name or "").strip():
            return TeacherAssignment(labels.teacher_unknown, found.teacher_id)
        return found
    return unknown


async def resolve_assignments(
    store: ScheduleStore,
    keys: List[AssignmentKey],
    settings: ResolverSettings,
    labels: Labels,
) -> Dict[AssignmentKey, TeacherAssignment]:
    """Look up every key concurrently and wait for all of them to settle."""
    if not keys:
        return {}
    results = await asyncio.gather(
        *(lookup_assignment(store, k, settings, labels) for k in keys),
        return_exceptions=True,
    )
    resolved: Dict[AssignmentKey, TeacherAssignment] = {}
    for key, res in zip(keys, results):
        if isinstance(res, BaseException):
            logging.getLogger(__name__).warning(f"Teacher lookup {key} aborted: {res!r}")
            resolved[key] = TeacherAssignment(labels.teacher_unknown)
        else:
            resolved[key] = res
    return resolved

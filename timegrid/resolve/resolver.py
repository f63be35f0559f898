from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Tuple

from ..config import Labels, ResolverSettings
from ..data.store import ScheduleStore
from ..models import ScheduleEvent
from ..timemath import week_start
from .assignments import assignment_keys, resolve_assignments
from .merge import build_event


@dataclass(frozen=True)
class Resolved:
    subject_id: str
    week_start: date
    events: Tuple[ScheduleEvent, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "subject_id": self.subject_id,
            "week_start": self.week_start.isoformat(),
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class Failure:
    reason: str
    cause: str | None = None


class ScheduleDataResolver:
    """Builds the week's ScheduleEvents for one student.

    Enrollment and timetable queries run in sequence; their failures come back
    as a :class:`Failure`. Teacher lookups run concurrently, once per distinct
    (class, subject) pair, and degrade to the unknown-teacher label instead of
    failing the pass.
    """

    def __init__(
        self,
        store: ScheduleStore,
        settings: ResolverSettings | None = None,
        labels: Labels | None = None,
    ):
        self.store = store
        self.settings = settings or ResolverSettings()
        self.labels = labels or Labels()

    async def resolve(self, subject_id: str, as_of_week: date | None = None) -> Resolved | Failure:
        if not subject_id:
            raise ValueError("resolve() needs a subject id; callers must wait until one is selected")
        logger = logging.getLogger(__name__)
        week = week_start(as_of_week or date.today())

        try:
            enrollments = await self.store.get_enrolled_classes(subject_id)
        except Exception as exc:
            logger.exception(f"Enrollment lookup failed for {subject_id}")
            return Failure("Failed to fetch enrolled classes", str(exc))
        class_ids: List[str] = list(dict.fromkeys(e.class_id for e in enrollments if e.class_id))
        if not class_ids:
            logger.info(f"{subject_id} is not enrolled in any classes")
            return Resolved(subject_id, week)

        try:
            slots = await self.store.get_timetable_slots(class_ids)
        except Exception as exc:
            logger.exception(f"Timetable fetch failed for classes {class_ids}")
            return Failure("Failed to fetch timetable", str(exc))
        if not slots:
            logger.info(f"No timetable slots for classes {class_ids}")
            return Resolved(subject_id, week)

        keys = assignment_keys(slots)
        logger.debug(f"{len(slots)} slots -> {len(keys)} teacher lookups")
        assignments = await resolve_assignments(self.store, keys, self.settings, self.labels)

        events = tuple(build_event(s, i, assignments, self.labels) for i, s in enumerate(slots))
        logger.info(f"Resolved {len(events)} events for {subject_id} (week of {week.isoformat()})")
        return Resolved(subject_id, week, events)

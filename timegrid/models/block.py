from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .event import ScheduleEvent


@dataclass(frozen=True)
class PositionedBlock:
    event: ScheduleEvent
    top: float
    height: float
    left: float
    width: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "event": self.event.to_dict(),
            "top": round(self.top, 2),
            "height": round(self.height, 2),
            "left": round(self.left, 2),
            "width": round(self.width, 2),
        }

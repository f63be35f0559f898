from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from ..timemath import decimal_hours, duration_minutes, format_time


@dataclass(frozen=True)
class ScheduleEvent:
    id: str
    title: str
    course: str
    day: int  # 0..6, Monday first
    start_time: int  # hour
    start_minute: int
    end_time: int  # hour
    end_minute: int
    teacher: str
    location: str
    color: str

    @property
    def start_decimal(self) -> float:
        return decimal_hours(self.start_time, self.start_minute)

    @property
    def end_decimal(self) -> float:
        return decimal_hours(self.end_time, self.end_minute)

    @property
    def duration_minutes(self) -> int:
        return duration_minutes(self.start_time, self.start_minute, self.end_time, self.end_minute)

    def time_range_label(self) -> str:
        start = format_time(self.start_time, self.start_minute)
        end = format_time(self.end_time, self.end_minute)
        return f"{start} - {end}"

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

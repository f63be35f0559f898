from .loader import JsonScheduleStore, load_json
from .store import ScheduleStore, StoreError
from .teachers import TeacherDirectory

__all__ = ["JsonScheduleStore", "ScheduleStore", "StoreError", "TeacherDirectory", "load_json"]

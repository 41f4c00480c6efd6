from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..schedules.model import ScheduleSlot
from ..schedules.parser import format_schedule


@dataclass(frozen=True)
class Subject:
    """Domain entity: a subject with its weekly schedule.

    The *_count fields are derived from the loaded attendance records and
    are never written to the database.
    """

    id: str
    user_id: str
    name: str
    code: str
    schedule: Tuple[ScheduleSlot, ...]
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    present_count: int = 0
    absent_count: int = 0
    not_taken_count: int = 0

    @property
    def schedule_text(self) -> str:
        return format_schedule(self.schedule)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "code": self.code,
            "schedule": self.schedule_text,
            "slots": [
                {"day": s.day, "start_time": s.start_time, "end_time": s.end_time}
                for s in self.schedule
            ],
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "present_count": self.present_count,
            "absent_count": self.absent_count,
            "not_taken_count": self.not_taken_count,
        }

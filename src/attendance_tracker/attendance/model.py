from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one subject on one date."""

    id: str
    subject_id: str
    user_id: str
    date: date
    status: AttendanceStatus
    hours: float
    note: Optional[str]
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subject_id": self.subject_id,
            "user_id": self.user_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "hours": self.hours,
            "note": self.note,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

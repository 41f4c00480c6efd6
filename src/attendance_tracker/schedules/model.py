from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly class interval, e.g. monday 09:00-10:00.

    `day` is always a lowercase weekday name. Times are naive wall-clock
    'HH:MM' (or 'H:MM') strings exactly as written in the schedule.
    """

    day: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of a schedule conflict check.

    A conflict is a normal result, not an error: callers decide whether to
    block the submission.
    """

    has_conflict: bool
    conflicting_subject: Optional[str] = None
    conflicting_subject_id: Optional[str] = None
    day: Optional[str] = None
    time: Optional[str] = None

    def to_dict(self) -> dict:
        if not self.has_conflict:
            return {"has_conflict": False}
        return {
            "has_conflict": True,
            "conflicting_subject": self.conflicting_subject,
            "conflicting_subject_id": self.conflicting_subject_id,
            "day": self.day,
            "time": self.time,
        }


NO_CONFLICT = ConflictResult(has_conflict=False)

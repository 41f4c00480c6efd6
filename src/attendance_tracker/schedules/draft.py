from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..common.validators import require_text
from ..core.constants import WEEKDAYS
from ..core.exceptions import ValidationError
from .model import ScheduleSlot
from .parser import format_schedule, parse_schedule

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")


class ScheduleDraft:
    """Slot list being built in an add/edit subject form.

    Validation happens here, synchronously, before anything reaches the
    store.
    """

    def __init__(self, slots: Optional[List[ScheduleSlot]] = None):
        self._slots: List[ScheduleSlot] = list(slots or [])

    @classmethod
    def from_string(cls, schedule: str | None) -> "ScheduleDraft":
        return cls(list(parse_schedule(require_text(schedule, "Schedule"))))

    @property
    def slots(self) -> Tuple[ScheduleSlot, ...]:
        return tuple(self._slots)

    def add_slot(self, day: str | None, start_time: str | None, end_time: str | None) -> ScheduleSlot:
        day = require_text(day, "Day")
        if not day or not day.strip():
            raise ValidationError("Please select a day before adding a time slot")

        day = day.strip().lower()
        if day not in WEEKDAYS:
            raise ValidationError(f"Unknown day {day!r}")

        start_time = (require_text(start_time, "Start time") or "").strip()
        end_time = (require_text(end_time, "End time") or "").strip()
        if not _TIME_RE.match(start_time) or not _TIME_RE.match(end_time):
            raise ValidationError("Start and end time must be HH:MM")

        slot = ScheduleSlot(day=day, start_time=start_time, end_time=end_time)
        if slot in self._slots:
            raise ValidationError("This time slot has already been added")

        self._slots.append(slot)
        return slot

    def remove_slot(self, index: int) -> ScheduleSlot:
        try:
            return self._slots.pop(index)
        except IndexError:
            raise ValidationError("Time slot does not exist") from None

    def to_schedule_string(self) -> str:
        return format_schedule(self._slots)

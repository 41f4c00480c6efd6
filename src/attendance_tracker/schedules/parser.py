"""
Schedule string parsing and formatting.

A subject schedule is persisted as a single string:

    "Monday 09:00 - 10:00; Wednesday 14:00 - 15:30"

Inside the application it is handled as a tuple of ScheduleSlot; this
module is the only place that converts between the two forms.

Rules:
- segments are split on ';' and trimmed
- a segment must look like '<Day> H:MM - HH:MM' (24-hour clock)
- segments that do not match, or whose day is not an English weekday,
  are dropped silently
- start < end is NOT checked; an inverted interval is kept as written
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from ..core.constants import SCHEDULE_SEPARATOR, WEEKDAYS
from .model import ScheduleSlot

_SLOT_RE = re.compile(r"^(\w+)\s+(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})$")


def parse_slot(segment: str) -> ScheduleSlot | None:
    match = _SLOT_RE.match(segment.strip())
    if not match:
        return None

    day = match.group(1).lower()
    if day not in WEEKDAYS:
        return None

    return ScheduleSlot(day=day, start_time=match.group(2), end_time=match.group(3))


def parse_schedule(schedule: str | None) -> Tuple[ScheduleSlot, ...]:
    """Parse a schedule string into slots, in written order."""
    if not schedule:
        return ()

    slots = []
    for segment in schedule.split(";"):
        slot = parse_slot(segment)
        if slot is not None:
            slots.append(slot)
    return tuple(slots)


def time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.

    No range check: '25:99' becomes 1599. Raises ValueError only when the
    value is not two ':'-separated integers.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    return int(parts[0]) * 60 + int(parts[1])


def format_time_range(start_time: str, end_time: str) -> str:
    return f"{start_time} - {end_time}"


def format_slot(slot: ScheduleSlot) -> str:
    return f"{slot.day.capitalize()} {format_time_range(slot.start_time, slot.end_time)}"


def format_schedule(slots: Iterable[ScheduleSlot]) -> str:
    return SCHEDULE_SEPARATOR.join(format_slot(s) for s in slots)

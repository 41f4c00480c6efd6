"""
Conflict detection.

A candidate schedule conflicts with another subject when a slot of each
falls on the same weekday and the intervals overlap.
Overlap rule:
    start < other_end AND end > other_start
Touching endpoints (end == other_start) are not a conflict.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Union

from .model import NO_CONFLICT, ConflictResult, ScheduleSlot
from .parser import format_time_range, parse_schedule, time_to_minutes

Candidate = Union[str, Sequence[ScheduleSlot], None]


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def slots_overlap(a: ScheduleSlot, b: ScheduleSlot) -> bool:
    if a.day != b.day:
        return False
    return overlaps(
        time_to_minutes(a.start_time),
        time_to_minutes(a.end_time),
        time_to_minutes(b.start_time),
        time_to_minutes(b.end_time),
    )


def _as_slots(candidate: Candidate) -> Sequence[ScheduleSlot]:
    if candidate is None or isinstance(candidate, str):
        return parse_schedule(candidate)
    return candidate


def iter_conflicts(
    candidate: Candidate,
    subjects: Iterable,
    exclude_subject_id: Optional[str] = None,
) -> Iterator[ConflictResult]:
    """
    Yield every conflict between `candidate` and the given subjects.

    Order: subjects in the order given, then candidate slots, then the
    subject's own slots. The subject whose id equals `exclude_subject_id`
    is skipped (the subject being edited never conflicts with itself).
    """
    slots = _as_slots(candidate)
    if not slots:
        return

    for subject in subjects:
        if exclude_subject_id is not None and subject.id == exclude_subject_id:
            continue
        existing = subject.schedule
        if not existing:
            continue
        for new_slot in slots:
            for old_slot in existing:
                if slots_overlap(new_slot, old_slot):
                    yield ConflictResult(
                        has_conflict=True,
                        conflicting_subject=subject.name,
                        conflicting_subject_id=subject.id,
                        day=new_slot.day,
                        time=format_time_range(new_slot.start_time, new_slot.end_time),
                    )


def check_conflict(
    candidate: Candidate,
    subjects: Iterable,
    exclude_subject_id: Optional[str] = None,
) -> ConflictResult:
    """Return the first conflict found, or NO_CONFLICT."""
    return next(iter_conflicts(candidate, subjects, exclude_subject_id), NO_CONFLICT)

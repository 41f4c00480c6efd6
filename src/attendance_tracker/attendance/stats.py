"""
Attendance statistics.

Policy: a "not taken" record means the class did not happen. It is
counted on its own but excluded from both the numerator and the
denominator of the attendance percentage, so a cancelled class neither
helps nor hurts the rate.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from ..core.enums import AttendanceStatus


def attendance_percentage(present: int, total: int) -> int:
    """round(present / total * 100) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * present + total) // (2 * total)


def format_percentage(value: int) -> str:
    return f"{int(value)}%"


@dataclass(frozen=True)
class SubjectStats:
    name: str
    present: int
    absent: int
    not_taken: int
    total: int
    percentage: int
    hours_present: float = 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "present": self.present,
            "absent": self.absent,
            "not_taken": self.not_taken,
            "total": self.total,
            "percentage": self.percentage,
            "percentage_label": format_percentage(self.percentage),
            "hours_present": self.hours_present,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    present: int
    absent: int
    not_taken: int
    percentage: int
    per_subject: Dict[str, SubjectStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "not_taken": self.not_taken,
            "percentage": self.percentage,
            "percentage_label": format_percentage(self.percentage),
            "per_subject": {sid: s.to_dict() for sid, s in self.per_subject.items()},
        }


def compute_stats(records: Iterable, subjects: Iterable) -> AttendanceStats:
    """Aggregate counts overall and per subject.

    Overall counts cover every record; per-subject entries are produced for
    each given subject (zeros when it has no records).
    """
    records = list(records)

    overall = Counter(r.status for r in records)
    by_subject: Dict[str, Counter] = {}
    hours_by_subject: Dict[str, float] = {}
    for r in records:
        by_subject.setdefault(r.subject_id, Counter())[r.status] += 1
        if r.status == AttendanceStatus.PRESENT:
            hours_by_subject[r.subject_id] = hours_by_subject.get(r.subject_id, 0.0) + float(r.hours)

    per_subject: Dict[str, SubjectStats] = {}
    for subject in subjects:
        counts = by_subject.get(subject.id, Counter())
        present = counts[AttendanceStatus.PRESENT]
        absent = counts[AttendanceStatus.ABSENT]
        not_taken = counts[AttendanceStatus.NOT_TAKEN]
        total = sum(counts.values()) - not_taken
        per_subject[subject.id] = SubjectStats(
            name=subject.name,
            present=present,
            absent=absent,
            not_taken=not_taken,
            total=total,
            percentage=attendance_percentage(present, total),
            hours_present=hours_by_subject.get(subject.id, 0.0),
        )

    present = overall[AttendanceStatus.PRESENT]
    not_taken = overall[AttendanceStatus.NOT_TAKEN]
    total = len(records) - not_taken
    return AttendanceStats(
        total=total,
        present=present,
        absent=overall[AttendanceStatus.ABSENT],
        not_taken=not_taken,
        percentage=attendance_percentage(present, total),
        per_subject=per_subject,
    )

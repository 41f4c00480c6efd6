"""
Conflict detection over subjects' weekly slots.

Touching endpoints (end == start) is NOT a conflict.
"""

from types import SimpleNamespace

import pytest

from attendance_tracker.schedules.conflicts import check_conflict, iter_conflicts, overlaps
from attendance_tracker.schedules.parser import parse_schedule


def _subject(subject_id, name, schedule):
    return SimpleNamespace(id=subject_id, name=name, schedule=parse_schedule(schedule))


def test_touching_intervals_do_not_overlap():
    assert not overlaps(9 * 60, 10 * 60, 10 * 60, 11 * 60)


def test_partial_overlap():
    assert overlaps(9 * 60, 10 * 60 + 30, 10 * 60, 11 * 60)


@pytest.mark.parametrize(
    "a, b",
    [
        ((540, 600), (600, 660)),
        ((540, 630), (600, 660)),
        ((540, 720), (600, 660)),
        ((600, 540), (550, 580)),
    ],
)
def test_overlaps_is_symmetric(a, b):
    assert overlaps(*a, *b) == overlaps(*b, *a)


def test_reports_first_conflict_with_candidate_time():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    result = check_conflict("Monday 09:30 - 10:30", subjects)

    assert result.has_conflict
    assert result.conflicting_subject == "Math"
    assert result.conflicting_subject_id == "s1"
    assert result.day == "monday"
    assert result.time == "09:30 - 10:30"


def test_touching_schedule_is_not_a_conflict():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    result = check_conflict("Monday 10:00 - 11:00", subjects)

    assert not result.has_conflict
    assert result.to_dict() == {"has_conflict": False}


def test_same_time_different_day_is_not_a_conflict():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    assert not check_conflict("Tuesday 09:00 - 10:00", subjects).has_conflict


def test_edited_subject_is_excluded():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    assert not check_conflict("Monday 09:15 - 09:45", subjects, exclude_subject_id="s1").has_conflict


def test_subjects_without_schedule_are_skipped():
    subjects = [_subject("s1", "Reading", ""), _subject("s2", "Art", "Friday 08:00 - 09:00")]

    assert not check_conflict("Monday 08:00 - 09:00", subjects).has_conflict


def test_first_match_follows_subject_order():
    subjects = [
        _subject("s1", "Physics", "Wednesday 10:00 - 11:00"),
        _subject("s2", "Chemistry", "Wednesday 10:30 - 11:30"),
    ]

    result = check_conflict("Wednesday 10:45 - 11:15", subjects)
    every = list(iter_conflicts("Wednesday 10:45 - 11:15", subjects))

    assert result.conflicting_subject == "Physics"
    assert [c.conflicting_subject for c in every] == ["Physics", "Chemistry"]


def test_accepts_parsed_slots_as_candidate():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    result = check_conflict(parse_schedule("Monday 08:30 - 09:30"), subjects)

    assert result.has_conflict


def test_empty_candidate_never_conflicts():
    subjects = [_subject("s1", "Math", "Monday 09:00 - 10:00")]

    assert not check_conflict("", subjects).has_conflict
    assert not check_conflict("not a schedule", subjects).has_conflict

"""
Schedule string format:
- entries '<Day> HH:MM - HH:MM' joined by '; '
- malformed or unknown-day segments are dropped, never raised
"""

from attendance_tracker.core.constants import WEEKDAYS
from attendance_tracker.schedules.model import ScheduleSlot
from attendance_tracker.schedules.parser import (
    format_schedule,
    format_slot,
    parse_schedule,
    time_to_minutes,
)


def test_parse_two_entries_lowercases_day():
    slots = parse_schedule("Monday 09:00 - 10:00; Wednesday 14:00 - 15:30")

    assert slots == (
        ScheduleSlot(day="monday", start_time="09:00", end_time="10:00"),
        ScheduleSlot(day="wednesday", start_time="14:00", end_time="15:30"),
    )


def test_parse_tolerates_whitespace_and_single_digit_hour():
    slots = parse_schedule("  Friday   9:05-10:00 ;TUESDAY 13:00   -   14:00  ")

    assert slots == (
        ScheduleSlot(day="friday", start_time="9:05", end_time="10:00"),
        ScheduleSlot(day="tuesday", start_time="13:00", end_time="14:00"),
    )


def test_malformed_segments_are_dropped():
    slots = parse_schedule("Monday 09:00 - 10:00; Mon, Wed 10-12; Funday 09:00 - 10:00; ; Thursday 9:00 - 10")

    assert [s.day for s in slots] == ["monday"]


def test_every_slot_day_is_a_lowercase_weekday():
    text = "; ".join(f"{d.upper()} 08:00 - 09:00" for d in WEEKDAYS) + "; Someday 01:00 - 02:00"

    slots = parse_schedule(text)

    assert len(slots) == 7
    assert all(s.day in WEEKDAYS for s in slots)


def test_empty_and_none_give_no_slots():
    assert parse_schedule("") == ()
    assert parse_schedule(None) == ()


def test_inverted_interval_is_kept_as_written():
    assert parse_schedule("Monday 11:00 - 10:00") == (
        ScheduleSlot(day="monday", start_time="11:00", end_time="10:00"),
    )


def test_format_recapitalizes_day():
    slot = ScheduleSlot(day="monday", start_time="09:00", end_time="10:00")

    assert format_slot(slot) == "Monday 09:00 - 10:00"


def test_parse_then_format_is_lossless_for_canonical_input():
    text = "Monday 09:00 - 10:00; Friday 13:30 - 15:00"

    assert format_schedule(parse_schedule(text)) == text


def test_time_to_minutes_has_no_range_check():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("25:99") == 25 * 60 + 99

from datetime import date

import pytest

from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import NotFoundError, ValidationError

TODAY = date(2026, 3, 4)


@pytest.fixture
def service():
    return AttendanceService()


@pytest.fixture
def math(store):
    return store.add_subject(name="Math", code="MA101")


def test_mark_defaults_hours_and_parses_inputs(service, store, math):
    record = service.mark(store, subject_id=math.id, day="2026-03-02", status="Present", today=TODAY)

    assert record.date == date(2026, 3, 2)
    assert record.status == AttendanceStatus.PRESENT
    assert record.hours == 1.0
    assert store.get_subject_by_id(math.id).present_count == 1


def test_mark_twice_same_day_is_rejected(service, store, math, attendance_repo):
    service.mark(store, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)

    with pytest.raises(ValidationError, match="already marked"):
        service.mark(store, subject_id=math.id, day="2026-03-02", status="absent", today=TODAY)
    assert len(attendance_repo.rows) == 1


def test_future_date_is_rejected(service, store, math):
    with pytest.raises(ValidationError, match="future"):
        service.mark(store, subject_id=math.id, day="2026-03-05", status="present", today=TODAY)


def test_today_is_allowed(service, store, math):
    record = service.mark(store, subject_id=math.id, day=TODAY, status="absent", today=TODAY)

    assert record.status == AttendanceStatus.ABSENT


@pytest.mark.parametrize("hours", [0, -1, "abc"])
def test_hours_must_be_positive(service, store, math, hours):
    with pytest.raises(ValidationError):
        service.mark(store, subject_id=math.id, day="2026-03-02", status="present", hours=hours, today=TODAY)


def test_unknown_status_is_rejected(service, store, math):
    with pytest.raises(ValidationError, match="status"):
        service.mark(store, subject_id=math.id, day="2026-03-02", status="late", today=TODAY)


def test_unknown_subject_is_rejected(service, store):
    with pytest.raises(ValidationError, match="select a subject"):
        service.mark(store, subject_id="missing", day="2026-03-02", status="present", today=TODAY)


def test_edit_may_keep_its_own_date(service, store, math):
    record = service.mark(store, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)

    assert service.edit(
        store, record.id, subject_id=math.id, day="2026-03-02", status="not_taken", hours="2", today=TODAY
    )

    edited = store.get_attendance_record(record.id)
    assert edited.status == AttendanceStatus.NOT_TAKEN
    assert edited.hours == 2.0


def test_edit_onto_another_records_date_is_rejected(service, store, math):
    service.mark(store, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)
    other = service.mark(store, subject_id=math.id, day="2026-03-03", status="present", today=TODAY)

    with pytest.raises(ValidationError, match="already marked"):
        service.edit(store, other.id, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)


def test_delete_and_get_unknown_record(service, store, math):
    record = service.mark(store, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)

    assert service.delete(store, record.id)
    with pytest.raises(NotFoundError):
        service.get(store, record.id)


def test_search_filters(service, store, math):
    art = store.add_subject(name="Art", code="AR101")
    service.mark(store, subject_id=math.id, day="2026-03-02", status="present", today=TODAY)
    service.mark(store, subject_id=math.id, day="2026-03-03", status="absent", today=TODAY)
    service.mark(store, subject_id=art.id, day="2026-03-02", status="absent", today=TODAY)

    assert len(service.search(store, day="2026-03-02")) == 2
    assert [r.date.day for r in service.search(store, subject_id=math.id)] == [3, 2]
    assert [r.subject_id for r in service.search(store, status="absent", day="2026-03-02")] == [art.id]
    assert [r.date.day for r in service.search(store)] == [3, 2, 2]

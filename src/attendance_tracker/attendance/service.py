from __future__ import annotations

from datetime import date
from typing import List, Optional

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import optional_text, require_positive
from ..core.constants import DEFAULT_HOURS, DUPLICATE_ATTENDANCE_MESSAGE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..store.facade import AttendanceStore
from .model import AttendanceRecord


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError("Please select a date")
    return parse_iso_date(str(value))


def _as_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Please select attendance status: present, absent or not_taken") from None


class AttendanceService:
    """Use cases behind the mark/edit attendance forms.

    One record per subject per date: a second record for the same pair is
    rejected here, before the store is called.
    """

    def _validate(
        self,
        store: AttendanceStore,
        *,
        subject_id: str,
        day,
        status,
        hours,
        today: date | None,
    ):
        if not subject_id or store.get_subject_by_id(subject_id) is None:
            raise ValidationError("Please select a subject")

        day = _as_date(day)
        if day > (today or today_local()):
            raise ValidationError("Attendance cannot be marked for a future date")

        hours = DEFAULT_HOURS if hours in (None, "") else require_positive(hours, "Hours")
        return day, _as_status(status), hours

    def mark(
        self,
        store: AttendanceStore,
        *,
        subject_id: str,
        day,
        status,
        hours=None,
        note: Optional[str] = None,
        today: date | None = None,
    ) -> AttendanceRecord:
        day, status, hours = self._validate(
            store, subject_id=subject_id, day=day, status=status, hours=hours, today=today
        )

        if store.find_attendance(subject_id, day):
            raise ValidationError(DUPLICATE_ATTENDANCE_MESSAGE)

        return store.add_attendance(
            subject_id=subject_id,
            date=day,
            status=status,
            hours=hours,
            note=optional_text(note, "Note"),
        )

    def edit(
        self,
        store: AttendanceStore,
        record_id: str,
        *,
        subject_id: str,
        day,
        status,
        hours=None,
        note: Optional[str] = None,
        today: date | None = None,
    ) -> bool:
        self.get(store, record_id)
        day, status, hours = self._validate(
            store, subject_id=subject_id, day=day, status=status, hours=hours, today=today
        )

        if any(r.id != record_id for r in store.find_attendance(subject_id, day)):
            raise ValidationError(DUPLICATE_ATTENDANCE_MESSAGE)

        return store.update_attendance(
            record_id,
            subject_id=subject_id,
            date=day,
            status=status,
            hours=hours,
            note=optional_text(note, "Note"),
        )

    def delete(self, store: AttendanceStore, record_id: str) -> bool:
        self.get(store, record_id)
        return store.delete_attendance(record_id)

    def get(self, store: AttendanceStore, record_id: str) -> AttendanceRecord:
        record = store.get_attendance_record(record_id)
        if record is None:
            raise NotFoundError("Attendance record not found")
        return record

    def search(
        self,
        store: AttendanceStore,
        *,
        day=None,
        status=None,
        subject_id: str | None = None,
    ) -> List[AttendanceRecord]:
        if day:
            records = store.get_attendance_for_date(_as_date(day))
        elif subject_id:
            records = store.get_attendance_by_subject(subject_id)
        else:
            records = sorted(store.attendance, key=lambda r: r.date, reverse=True)

        if subject_id:
            records = [r for r in records if r.subject_id == subject_id]
        if status:
            wanted = _as_status(status)
            records = [r for r in records if r.status == wanted]
        return records

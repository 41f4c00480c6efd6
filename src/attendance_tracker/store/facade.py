"""
Session-scoped data store.

AttendanceStore keeps an in-memory mirror of one user's subjects and
attendance records and exposes the CRUD operations that change them.

Rules:
- every repository call carries the store's user_id
- the mirror only changes after the repository call succeeded
- store failures are logged and reported through the notifier; the
  mirror is left as it was. add_* re-raise RemoteStoreError so the caller
  can react, update_* / delete_* return False
- schedule conflicts are NOT checked here; callers run check_conflict()
  before add_subject / update_subject
- a ValidationError from a repository (duplicate key) propagates as is
- writes are refused while the mirror is not loaded
- mirror lists are replaced or appended under a per-store lock
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.stats import AttendanceStats, compute_stats
from ..common.datetime_utils import parse_iso_date, weekday_name
from ..core.constants import DEFAULT_HOURS
from ..core.enums import AttendanceStatus
from ..core.exceptions import RemoteStoreError
from ..schedules.conflicts import Candidate, check_conflict
from ..schedules.model import ConflictResult, ScheduleSlot
from ..schedules.parser import time_to_minutes
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


def _discard(message: str, category: str) -> None:
    return None


class AttendanceStore:
    def __init__(
        self,
        user_id: str,
        subjects: SubjectRepository,
        attendance: AttendanceRepository,
        *,
        notify: Optional[Notifier] = None,
    ):
        self._user_id = user_id
        self._subjects_repo = subjects
        self._attendance_repo = attendance
        self._notify = notify or _discard

        self._subjects: List[Subject] = []
        self._attendance: List[AttendanceRecord] = []
        self.is_loaded = False
        # Guards the mirror lists; one store can serve concurrent requests.
        self._lock = threading.RLock()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def subjects(self) -> Tuple[Subject, ...]:
        return tuple(self._subjects)

    @property
    def attendance(self) -> Tuple[AttendanceRecord, ...]:
        return tuple(self._attendance)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_data(self) -> bool:
        try:
            subjects = list(self._subjects_repo.list_for_user(self._user_id))
            records = list(self._attendance_repo.list_for_user(self._user_id))
        except RemoteStoreError:
            logger.exception("loading data failed for user %s", self._user_id)
            self._notify("Failed to load your data", "danger")
            return False

        with self._lock:
            self._subjects = subjects
            self._attendance = records
            self._refresh_counters()
            self.is_loaded = True
        logger.debug(
            "loaded %d subjects and %d records for user %s",
            len(subjects),
            len(records),
            self._user_id,
        )
        return True

    # ------------------------------------------------------------------
    # Subjects
    # ------------------------------------------------------------------

    def add_subject(
        self,
        *,
        name: str,
        code: str,
        schedule: Sequence[ScheduleSlot] = (),
        description: Optional[str] = None,
    ) -> Subject:
        self._require_loaded("Failed to add subject")
        try:
            subject = self._subjects_repo.create(
                user_id=self._user_id,
                name=name,
                code=code,
                schedule=tuple(schedule),
                description=description,
            )
        except RemoteStoreError:
            logger.exception("adding subject %r failed", name)
            self._notify("Failed to add subject", "danger")
            raise

        with self._lock:
            self._subjects.append(subject)
        logger.info("subject %s added for user %s", subject.id, self._user_id)
        self._notify(f'Subject "{subject.name}" added successfully', "success")
        return subject

    def update_subject(
        self,
        subject_id: str,
        *,
        name: str,
        code: str,
        schedule: Sequence[ScheduleSlot] = (),
        description: Optional[str] = None,
    ) -> bool:
        if not self._check_loaded("Failed to update subject"):
            return False
        try:
            updated = self._subjects_repo.update(
                user_id=self._user_id,
                subject_id=subject_id,
                name=name,
                code=code,
                schedule=tuple(schedule),
                description=description,
            )
        except RemoteStoreError:
            logger.exception("updating subject %s failed", subject_id)
            self._notify("Failed to update subject", "danger")
            return False

        if updated is None:
            self._notify("Subject not found", "danger")
            return False

        with self._lock:
            self._subjects = [updated if s.id == subject_id else s for s in self._subjects]
            self._refresh_counters({subject_id})
        logger.info("subject %s updated", subject_id)
        self._notify(f'Subject "{updated.name}" updated successfully', "success")
        return True

    def delete_subject(self, subject_id: str) -> bool:
        """Delete a subject together with all of its attendance records."""
        if not self._check_loaded("Failed to delete subject"):
            return False
        existing = self.get_subject_by_id(subject_id)
        try:
            found = self._subjects_repo.delete_with_attendance(user_id=self._user_id, subject_id=subject_id)
        except RemoteStoreError:
            logger.exception("deleting subject %s failed", subject_id)
            self._notify("Failed to delete subject", "danger")
            return False

        with self._lock:
            self._subjects = [s for s in self._subjects if s.id != subject_id]
            self._attendance = [r for r in self._attendance if r.subject_id != subject_id]

        if not found:
            self._notify("Subject not found", "danger")
            return False

        logger.info("subject %s deleted with its attendance", subject_id)
        name = existing.name if existing else "Subject"
        self._notify(f'"{name}" deleted successfully', "success")
        return True

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def add_attendance(
        self,
        *,
        subject_id: str,
        date: date,
        status: AttendanceStatus,
        hours: float = DEFAULT_HOURS,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        self._require_loaded("Failed to mark attendance")
        try:
            record = self._attendance_repo.create(
                user_id=self._user_id,
                subject_id=subject_id,
                date=date,
                status=status,
                hours=hours,
                note=note,
            )
        except RemoteStoreError:
            logger.exception("recording attendance for subject %s failed", subject_id)
            self._notify("Failed to mark attendance", "danger")
            raise

        with self._lock:
            self._attendance.append(record)
            self._refresh_counters({subject_id})
        self._notify("Attendance recorded successfully", "success")
        return record

    def update_attendance(
        self,
        record_id: str,
        *,
        subject_id: str,
        date: date,
        status: AttendanceStatus,
        hours: float = DEFAULT_HOURS,
        note: Optional[str] = None,
    ) -> bool:
        if not self._check_loaded("Failed to update attendance"):
            return False
        previous = self.get_attendance_record(record_id)
        try:
            updated = self._attendance_repo.update(
                user_id=self._user_id,
                record_id=record_id,
                subject_id=subject_id,
                date=date,
                status=status,
                hours=hours,
                note=note,
            )
        except RemoteStoreError:
            logger.exception("updating attendance %s failed", record_id)
            self._notify("Failed to update attendance", "danger")
            return False

        if updated is None:
            self._notify("Attendance record not found", "danger")
            return False

        touched = {subject_id}
        if previous is not None:
            touched.add(previous.subject_id)
        with self._lock:
            self._attendance = [updated if r.id == record_id else r for r in self._attendance]
            self._refresh_counters(touched)
        self._notify("Attendance updated successfully", "success")
        return True

    def delete_attendance(self, record_id: str) -> bool:
        if not self._check_loaded("Failed to delete attendance record"):
            return False
        previous = self.get_attendance_record(record_id)
        try:
            found = self._attendance_repo.delete(user_id=self._user_id, record_id=record_id)
        except RemoteStoreError:
            logger.exception("deleting attendance %s failed", record_id)
            self._notify("Failed to delete attendance record", "danger")
            return False

        with self._lock:
            self._attendance = [r for r in self._attendance if r.id != record_id]
            if previous is not None:
                self._refresh_counters({previous.subject_id})

        if not found:
            self._notify("Attendance record not found", "danger")
            return False

        self._notify("Attendance record deleted", "success")
        return True

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def get_subject_by_id(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self._subjects if s.id == subject_id), None)

    def get_attendance_record(self, record_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in self._attendance if r.id == record_id), None)

    def get_attendance_by_subject(self, subject_id: str) -> List[AttendanceRecord]:
        """Records of one subject, newest date first."""
        records = [r for r in self._attendance if r.subject_id == subject_id]
        records.sort(key=lambda r: r.date, reverse=True)
        return records

    def get_attendance_for_date(self, day: date | str) -> List[AttendanceRecord]:
        if isinstance(day, str):
            day = parse_iso_date(day)
        return [r for r in self._attendance if r.date == day]

    def find_attendance(self, subject_id: str, day: date) -> List[AttendanceRecord]:
        return [r for r in self._attendance if r.subject_id == subject_id and r.date == day]

    def check_conflict(self, candidate: Candidate, exclude_subject_id: Optional[str] = None) -> ConflictResult:
        return check_conflict(candidate, self._subjects, exclude_subject_id)

    def classes_for_day(self, day: date | str) -> List[Tuple[Subject, ScheduleSlot]]:
        """Every (subject, slot) scheduled on a weekday, earliest start first."""
        if isinstance(day, date):
            day = weekday_name(day)
        day = day.lower()

        classes = [(s, slot) for s in self._subjects for slot in s.schedule if slot.day == day]
        classes.sort(key=lambda item: time_to_minutes(item[1].start_time))
        return classes

    def stats(self) -> AttendanceStats:
        return compute_stats(self._attendance, self._subjects)

    # ------------------------------------------------------------------

    def _check_loaded(self, failure_message: str) -> bool:
        if self.is_loaded:
            return True
        logger.warning("write refused for user %s: data not loaded", self._user_id)
        self._notify(failure_message, "danger")
        return False

    def _require_loaded(self, failure_message: str) -> None:
        if not self._check_loaded(failure_message):
            raise RemoteStoreError(f"data for user {self._user_id} is not loaded")

    def _refresh_counters(self, subject_ids: Optional[Iterable[str]] = None) -> None:
        with self._lock:
            wanted = set(subject_ids) if subject_ids is not None else None
            targets = [s for s in self._subjects if wanted is None or s.id in wanted]
            if not targets:
                return

            per_subject = compute_stats(self._attendance, targets).per_subject
            refreshed = {}
            for s in targets:
                counts = per_subject[s.id]
                refreshed[s.id] = dataclasses.replace(
                    s,
                    present_count=counts.present,
                    absent_count=counts.absent,
                    not_taken_count=counts.not_taken,
                )
            self._subjects = [refreshed.get(s.id, s) for s in self._subjects]

from __future__ import annotations

import dataclasses
import itertools
from datetime import date, datetime
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.common.web import flash_notify
from attendance_tracker.container import wire_container
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import NotFoundError, RemoteStoreError
from attendance_tracker.main import create_app
from attendance_tracker.schedules.parser import parse_schedule
from attendance_tracker.store.facade import AttendanceStore
from attendance_tracker.subjects.model import Subject
from attendance_tracker.users.model import User

NOW = datetime(2026, 3, 2, 8, 0, 0)


class _Failing:
    """fail_on holds operation names that should raise RemoteStoreError."""

    def __init__(self):
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _call(self, op: str, user_id: str) -> None:
        self.calls.append((op, user_id))
        if op in self.fail_on:
            raise RemoteStoreError(f"{op} failed")


class InMemoryAttendance(_Failing):
    def __init__(self):
        super().__init__()
        self.rows: dict[str, AttendanceRecord] = {}
        self.subjects: Optional["InMemorySubjects"] = None
        self._seq = 0

    def list_for_user(self, user_id):
        self._call("list", user_id)
        return [r for r in self.rows.values() if r.user_id == user_id]

    def create(self, *, user_id, subject_id, date, status, hours, note=None):
        self._call("create", user_id)
        subject = self.subjects.rows.get(subject_id) if self.subjects else None
        if not subject or subject.user_id != user_id:
            raise NotFoundError("Subject not found")
        self._seq += 1
        record = AttendanceRecord(
            id=f"a{self._seq}",
            subject_id=subject_id,
            user_id=user_id,
            date=date,
            status=status,
            hours=float(hours),
            note=note,
            created_at=NOW,
            updated_at=NOW,
        )
        self.rows[record.id] = record
        return record

    def update(self, *, user_id, record_id, subject_id, date, status, hours, note=None):
        self._call("update", user_id)
        row = self.rows.get(record_id)
        if not row or row.user_id != user_id:
            return None
        row = dataclasses.replace(row, subject_id=subject_id, date=date, status=status, hours=float(hours), note=note)
        self.rows[record_id] = row
        return row

    def delete(self, *, user_id, record_id):
        self._call("delete", user_id)
        row = self.rows.get(record_id)
        if not row or row.user_id != user_id:
            return False
        del self.rows[record_id]
        return True


class InMemorySubjects(_Failing):
    def __init__(self, attendance: InMemoryAttendance):
        super().__init__()
        self.rows: dict[str, Subject] = {}
        self.attendance = attendance
        attendance.subjects = self
        self._ids = itertools.count(1)

    def list_for_user(self, user_id):
        self._call("list", user_id)
        return [s for s in self.rows.values() if s.user_id == user_id]

    def get(self, *, user_id, subject_id):
        row = self.rows.get(subject_id)
        return row if row and row.user_id == user_id else None

    def create(self, *, user_id, name, code, schedule, description=None):
        self._call("create", user_id)
        seq = next(self._ids)
        subject = Subject(
            id=f"s{seq}",
            user_id=user_id,
            name=name,
            code=code,
            schedule=tuple(schedule),
            description=description,
            created_at=NOW,
            updated_at=NOW,
        )
        self.rows[subject.id] = subject
        return subject

    def update(self, *, user_id, subject_id, name, code, schedule, description=None):
        self._call("update", user_id)
        row = self.get(user_id=user_id, subject_id=subject_id)
        if row is None:
            return None
        row = dataclasses.replace(row, name=name, code=code, schedule=tuple(schedule), description=description)
        self.rows[subject_id] = row
        return row

    def delete_with_attendance(self, *, user_id, subject_id):
        self._call("delete", user_id)
        row = self.get(user_id=user_id, subject_id=subject_id)
        if row is None:
            return False
        for rid in [rid for rid, r in self.attendance.rows.items() if r.subject_id == subject_id and r.user_id == user_id]:
            del self.attendance.rows[rid]
        del self.rows[subject_id]
        return True

    def seed(self, *, user_id, name, schedule="", code="CODE"):
        """Insert directly, bypassing call tracking."""
        seq = next(self._ids)
        subject = Subject(
            id=f"s{seq}",
            user_id=user_id,
            name=name,
            code=code,
            schedule=parse_schedule(schedule),
            description=None,
            created_at=NOW,
            updated_at=NOW,
        )
        self.rows[subject.id] = subject
        return subject


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[str, User] = {}
        self._seq = 0

    def get_by_id(self, user_id):
        return self.by_id.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash):
        self._seq += 1
        user = User(id=f"u{self._seq}", name=name, email=email, password_hash=password_hash, created_at=NOW)
        self.by_id[user.id] = user
        return user


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def subjects_repo(attendance_repo):
    return InMemorySubjects(attendance_repo)


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def store(subjects_repo, attendance_repo, notifications):
    s = AttendanceStore(
        "u1",
        subjects_repo,
        attendance_repo,
        notify=lambda message, category: notifications.append((category, message)),
    )
    assert s.load_data()
    return s


@pytest.fixture
def record_factory():
    def make(subject_id, status, *, day=date(2026, 3, 2), user_id="u1", hours=1.0, record_id="r"):
        return AttendanceRecord(
            id=record_id,
            subject_id=subject_id,
            user_id=user_id,
            date=day,
            status=AttendanceStatus(status),
            hours=hours,
            note=None,
            created_at=NOW,
            updated_at=NOW,
        )

    return make


@pytest.fixture
def app(users_repo, subjects_repo, attendance_repo):
    container = wire_container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        notify=flash_notify,
    )
    return create_app(container=container, settings_module="attendance_tracker.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LOW_ATTENDANCE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .store.facade import Notifier
from .store.registry import StoreRegistry
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    subjects_repo: SubjectRepository
    attendance_repo: AttendanceRepository

    stores: StoreRegistry

    auth_service: AuthService
    subject_service: SubjectService
    attendance_service: AttendanceService

    low_attendance_threshold: int = DEFAULT_LOW_ATTENDANCE_THRESHOLD


def wire_container(
    *,
    users_repo: UserRepository,
    subjects_repo: SubjectRepository,
    attendance_repo: AttendanceRepository,
    notify: Optional[Notifier] = None,
    low_attendance_threshold: int = DEFAULT_LOW_ATTENDANCE_THRESHOLD,
) -> Container:
    return Container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        stores=StoreRegistry(subjects_repo, attendance_repo, notify=notify),
        auth_service=AuthService(users_repo),
        subject_service=SubjectService(),
        attendance_service=AttendanceService(),
        low_attendance_threshold=int(low_attendance_threshold),
    )


def build_container(
    *,
    db_config: dict,
    notify: Optional[Notifier] = None,
    low_attendance_threshold: int = DEFAULT_LOW_ATTENDANCE_THRESHOLD,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notify=notify,
        low_attendance_threshold=low_attendance_threshold,
    )

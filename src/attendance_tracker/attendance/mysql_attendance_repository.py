from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import now_local
from ..core.constants import DUPLICATE_ATTENDANCE_MESSAGE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, subject_id, user_id, date, status, hours, note, created_at, updated_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=r["id"],
        subject_id=r["subject_id"],
        user_id=r["user_id"],
        date=r["date"],
        status=AttendanceStatus(r["status"]),
        hours=float(r["hours"]),
        note=r.get("note"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


def _execute_unique(cur, sql: str, params: tuple) -> None:
    """Execute a write that may hit UNIQUE (subject_id, date)."""
    try:
        cur.execute(sql, params)
    except mysql.connector.IntegrityError as e:
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ValidationError(DUPLICATE_ATTENDANCE_MESSAGE) from e
        raise


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s
                ORDER BY date DESC, created_at DESC
                """,
                (user_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: str,
        subject_id: str,
        date: date,
        status: AttendanceStatus,
        hours: float,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        now = now_local().replace(microsecond=0)
        record = AttendanceRecord(
            id=uuid.uuid4().hex,
            subject_id=subject_id,
            user_id=user_id,
            date=date,
            status=status,
            hours=float(hours),
            note=note,
            created_at=now,
            updated_at=now,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            # The subject must belong to the same user; otherwise nothing is inserted.
            _execute_unique(
                cur,
                """
                INSERT INTO attendance(id, subject_id, user_id, date, status, hours, note, created_at, updated_at)
                SELECT %s, s.id, s.user_id, %s, %s, %s, %s, %s, %s
                FROM subjects s
                WHERE s.id=%s AND s.user_id=%s
                """,
                (record.id, date, status.value, record.hours, note, now, now, subject_id, user_id),
            )
            if cur.rowcount <= 0:
                raise NotFoundError("Subject not found")
        return record

    def update(
        self,
        *,
        user_id: str,
        record_id: str,
        subject_id: str,
        date: date,
        status: AttendanceStatus,
        hours: float,
        note: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        now = now_local().replace(microsecond=0)
        with db_cursor(self._conn_factory) as (_, cur):
            _execute_unique(
                cur,
                """
                UPDATE attendance a
                JOIN subjects s ON s.id=%s AND s.user_id=a.user_id
                SET a.subject_id=s.id, a.date=%s, a.status=%s, a.hours=%s, a.note=%s, a.updated_at=%s
                WHERE a.id=%s AND a.user_id=%s
                """,
                (subject_id, date, status.value, float(hours), note, now, record_id, user_id),
            )
            if cur.rowcount <= 0:
                return None

            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE id=%s AND user_id=%s",
                (record_id, user_id),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def delete(self, *, user_id: str, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE id=%s AND user_id=%s",
                (record_id, user_id),
            )
            return cur.rowcount > 0

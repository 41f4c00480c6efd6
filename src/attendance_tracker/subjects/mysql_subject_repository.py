from __future__ import annotations

import uuid
from typing import Optional, Sequence, Tuple

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..schedules.model import ScheduleSlot
from ..schedules.parser import format_schedule, parse_schedule
from .model import Subject
from .repository import SubjectRepository

_COLUMNS = "id, user_id, name, code, schedule, description, created_at, updated_at"


def _to_subject(r: dict) -> Subject:
    return Subject(
        id=r["id"],
        user_id=r["user_id"],
        name=r["name"],
        code=r["code"],
        schedule=parse_schedule(r.get("schedule")),
        description=r.get("description"),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM subjects
                WHERE user_id=%s
                ORDER BY created_at ASC
                """,
                (user_id,),
            )
            return [_to_subject(r) for r in fetchall(cur)]

    def get(self, *, user_id: str, subject_id: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM subjects WHERE id=%s AND user_id=%s",
                (subject_id, user_id),
            )
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def create(
        self,
        *,
        user_id: str,
        name: str,
        code: str,
        schedule: Tuple[ScheduleSlot, ...],
        description: Optional[str] = None,
    ) -> Subject:
        now = now_local().replace(microsecond=0)
        subject = Subject(
            id=uuid.uuid4().hex,
            user_id=user_id,
            name=name,
            code=code,
            schedule=tuple(schedule),
            description=description,
            created_at=now,
            updated_at=now,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO subjects(id, user_id, name, code, schedule, description, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    subject.id,
                    user_id,
                    name,
                    code,
                    format_schedule(subject.schedule),
                    description,
                    now,
                    now,
                ),
            )
        return subject

    def update(
        self,
        *,
        user_id: str,
        subject_id: str,
        name: str,
        code: str,
        schedule: Tuple[ScheduleSlot, ...],
        description: Optional[str] = None,
    ) -> Optional[Subject]:
        now = now_local().replace(microsecond=0)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subjects
                SET name=%s, code=%s, schedule=%s, description=%s, updated_at=%s
                WHERE id=%s AND user_id=%s
                """,
                (name, code, format_schedule(schedule), description, now, subject_id, user_id),
            )
            if cur.rowcount <= 0:
                return None

            cur.execute(
                f"SELECT {_COLUMNS} FROM subjects WHERE id=%s AND user_id=%s",
                (subject_id, user_id),
            )
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def delete_with_attendance(self, *, user_id: str, subject_id: str) -> bool:
        # Both deletes share one transaction: either both commit or neither.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE subject_id=%s AND user_id=%s",
                (subject_id, user_id),
            )
            cur.execute(
                "DELETE FROM subjects WHERE id=%s AND user_id=%s",
                (subject_id, user_id),
            )
            return cur.rowcount > 0

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        """Return the updated record, or None when no row matched."""

        raise NotImplementedError

    def delete(self, *, user_id: str, record_id: str) -> bool:
        raise NotImplementedError

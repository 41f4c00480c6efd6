from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from ..schedules.model import ScheduleSlot
from .model import Subject


class SubjectRepository(Protocol):
    """Repository interface for subjects.

    Every method is scoped by `user_id`: a row owned by another user is
    treated exactly like a missing row.
    """

    def list_for_user(self, user_id: str) -> Sequence[Subject]:
        raise NotImplementedError

    def get(self, *, user_id: str, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        name: str,
        code: str,
        schedule: Tuple[ScheduleSlot, ...],
        description: Optional[str] = None,
    ) -> Subject:
        raise NotImplementedError

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
        """Return the updated subject, or None when no row matched."""

        raise NotImplementedError

    def delete_with_attendance(self, *, user_id: str, subject_id: str) -> bool:
        """Delete a subject and all of its attendance rows atomically.

        Returns False when the subject does not exist for this user.
        """

        raise NotImplementedError

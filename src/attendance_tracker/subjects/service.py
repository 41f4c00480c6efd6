from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..common.validators import optional_text, require_min_length
from ..core.constants import MIN_NAME_LENGTH
from ..core.exceptions import NotFoundError
from ..schedules.model import NO_CONFLICT, ConflictResult, ScheduleSlot
from ..store.facade import AttendanceStore
from .model import Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectOutcome:
    """Result of a create/update attempt.

    `conflict.has_conflict` means the schedule overlaps another subject and
    nothing was saved.
    """

    subject: Optional[Subject] = None
    conflict: ConflictResult = NO_CONFLICT
    saved: bool = False


class SubjectService:
    """Use cases behind the add/edit/delete subject forms.

    The store itself never checks schedule conflicts; this layer does it
    before committing.
    """

    def _clean(self, name: str, code: str, description: Optional[str]) -> Tuple[str, str, Optional[str]]:
        name = require_min_length(name, "Subject name", MIN_NAME_LENGTH)
        code = require_min_length(code, "Subject code", MIN_NAME_LENGTH)
        return name, code, optional_text(description, "Description")

    def create(
        self,
        store: AttendanceStore,
        *,
        name: str,
        code: str,
        schedule: Sequence[ScheduleSlot] = (),
        description: Optional[str] = None,
    ) -> SubjectOutcome:
        name, code, description = self._clean(name, code, description)

        conflict = store.check_conflict(schedule)
        if conflict.has_conflict:
            logger.info("subject %r blocked by conflict with %r", name, conflict.conflicting_subject)
            return SubjectOutcome(conflict=conflict)

        subject = store.add_subject(name=name, code=code, schedule=schedule, description=description)
        return SubjectOutcome(subject=subject, saved=True)

    def update(
        self,
        store: AttendanceStore,
        subject_id: str,
        *,
        name: str,
        code: str,
        schedule: Sequence[ScheduleSlot] = (),
        description: Optional[str] = None,
    ) -> SubjectOutcome:
        self.get(store, subject_id)
        name, code, description = self._clean(name, code, description)

        conflict = store.check_conflict(schedule, exclude_subject_id=subject_id)
        if conflict.has_conflict:
            return SubjectOutcome(subject=store.get_subject_by_id(subject_id), conflict=conflict)

        saved = store.update_subject(subject_id, name=name, code=code, schedule=schedule, description=description)
        return SubjectOutcome(subject=store.get_subject_by_id(subject_id), saved=saved)

    def delete(self, store: AttendanceStore, subject_id: str) -> bool:
        self.get(store, subject_id)
        return store.delete_subject(subject_id)

    def get(self, store: AttendanceStore, subject_id: str) -> Subject:
        subject = store.get_subject_by_id(subject_id)
        if subject is None:
            raise NotFoundError("Subject not found")
        return subject

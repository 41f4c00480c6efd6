from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import RemoteStoreError
from ..subjects.repository import SubjectRepository
from .facade import AttendanceStore, Notifier

logger = logging.getLogger(__name__)


class StoreRegistry:
    """Holds one AttendanceStore per logged-in user.

    A store is opened (and loaded) on login and discarded on logout.
    """

    def __init__(
        self,
        subjects: SubjectRepository,
        attendance: AttendanceRepository,
        *,
        notify: Optional[Notifier] = None,
    ):
        self._subjects = subjects
        self._attendance = attendance
        self._notify = notify
        self._stores: Dict[str, AttendanceStore] = {}
        self._lock = threading.Lock()

    def open(self, user_id: str) -> AttendanceStore:
        store = AttendanceStore(user_id, self._subjects, self._attendance, notify=self._notify)
        store.load_data()
        with self._lock:
            self._stores[user_id] = store
        logger.debug("store opened for user %s", user_id)
        return store

    def get(self, user_id: str) -> AttendanceStore:
        """Return the user's loaded store, opening one if the process lost it.

        Raises RemoteStoreError when the user's data cannot be loaded.
        """
        with self._lock:
            store = self._stores.get(user_id)
        if store is None or not store.is_loaded:
            store = self.open(user_id)
        if not store.is_loaded:
            raise RemoteStoreError(f"data for user {user_id} is not loaded")
        return store

    def close(self, user_id: str) -> None:
        with self._lock:
            self._stores.pop(user_id, None)
        logger.debug("store closed for user %s", user_id)

    def __contains__(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._stores

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Domain entity: an account owning subjects and attendance.

    Plain data object, no database access.
    """

    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime

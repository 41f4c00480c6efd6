from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(user_id=user.id, name=user.name, email=user.email)


class AuthService:
    """Use cases: sign up and log in."""

    def __init__(self, users: UserRepository):
        self._users = users

    def signup(self, *, name: str, email: str, password: str) -> SessionUser:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email already in use")

        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        logger.info("user %s signed up", user.id)
        return SessionUser.from_user(user)

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
            raise AuthenticationError("Please provide email and password")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser.from_user(user)

    def get(self, user_id: str) -> SessionUser | None:
        user = self._users.get_by_id(user_id)
        return SessionUser.from_user(user) if user else None

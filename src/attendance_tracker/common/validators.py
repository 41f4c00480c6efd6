from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_text(value, field_name: str) -> str | None:
    """None passes through; anything else must be a string."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def require_non_empty(value: str | None, field_name: str) -> str:
    value = require_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str | None, field_name: str, min_len: int) -> str:
    value = require_text(value, field_name)
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value.strip()


def require_positive(value, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def optional_text(value: str | None, field_name: str = "Text") -> str | None:
    value = require_text(value, field_name)
    if value is None:
        return None
    value = value.strip()
    return value or None

from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_negative(value: int, field_name: str) -> int:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative number, got {value!r}")
    return value


def require_positive(value: float, field_name: str) -> float:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be positive, got {value!r}")
    return value

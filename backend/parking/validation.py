from __future__ import annotations

from typing import Any, Iterable, Mapping

from parking.errors import ValidationError


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def require_fields(values: Mapping[str, Any], names: Iterable[str], message: str) -> None:
    """Raise ValidationError(message) listing every absent field in `names`."""

    missing = [n for n in names if _is_missing(values.get(n))]
    if missing:
        raise ValidationError(message, details={"missing": missing})


def positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        text = value.strip()
        # isdigit() accepts superscripts that int() rejects
        if not (text.isascii() and text.isdecimal()):
            raise ValidationError(f"{name} must be a positive integer")
        value = int(text)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer")
    return value


def positive_number(name: str, value: Any) -> float | int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"{name} must be a positive number")
    if not isinstance(value, (int, float)) or value <= 0 or value != value:
        raise ValidationError(f"{name} must be a positive number")
    return value

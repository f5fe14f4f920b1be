from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if data.get(f) is None or (isinstance(data.get(f), str) and not data[f].strip())]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def require_non_negative(value: Any, field_name: str) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_month(month: Any, year: Any) -> tuple[int, int]:
    try:
        m, y = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year must be integers")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1900 <= y <= 9999:
        raise ValidationError("Year is out of range")
    return m, y


def require_collection(name: Any, allowed: Iterable[str]) -> str:
    if not name or not isinstance(name, str):
        raise ValidationError("Invalid collection name")
    if name not in allowed:
        raise ValidationError(f"Unknown collection: {name}")
    return name

"""Coercion helpers used by record types at the store boundary."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..common.datetime_utils import coerce_date
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def required(doc: Mapping[str, Any], key: str) -> Any:
    value = doc.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Document is missing required field '{key}'")
    return value


def as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def as_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"Expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Expected a number, got {value!r}")


def as_int(value: Any, default: int = 0) -> int:
    return int(as_float(value, float(default)))


def as_bool(value: Any, default: bool = False) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in {"true", "1", "yes", "y", "active"}:
        return True
    if text in {"false", "0", "no", "n", "inactive"}:
        return False
    raise ValidationError(f"Expected a boolean, got {value!r}")


def as_date(value: Any) -> Optional[date]:
    try:
        return coerce_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def as_enum(enum_type: Type[E], value: Any, default: Optional[E] = None) -> E:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"Missing {enum_type.__name__}")
        return default
    try:
        return enum_type(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid {enum_type.__name__}: {value!r}")

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of stored date values.

    Documents keep dates as ``YYYY-MM-DD`` strings, but Firestore hands back
    ``DatetimeWithNanoseconds`` for timestamp fields and older records carry a
    full ISO datetime string.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def format_iso_date(value: Optional[date]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)

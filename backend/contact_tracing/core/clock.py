# backend/contact_tracing/core/clock.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Optional

from dateutil import parser as dateparse
from pydantic import AfterValidator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Naive values are taken to be UTC already (that's how SQLite hands them back)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Optional[object]) -> Optional[datetime]:
    """Parse an ISO-8601-ish string (or pass a datetime through) as aware UTC.

    Empty values return None; anything unparseable raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    text = str(value).strip()
    if not text:
        return None
    try:
        return as_utc(dateparse.isoparse(text))
    except (ValueError, OverflowError):
        pass
    try:
        return as_utc(dateparse.parse(text))
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"not a timestamp: {text!r}") from exc


# datetime field that always comes out timezone-aware UTC
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]

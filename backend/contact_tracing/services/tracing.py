"""Primary-contact tracing.

Given a case subject and a lookback window, find every distinct user who
interacted with the subject inside the window. Each contact is reported once,
with the most recent qualifying interaction (ties go to the later-logged
record). Results are ordered by last contact, newest first, then contact id.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from contact_tracing.core.clock import as_utc, utcnow
from contact_tracing.core.errors import DependencyFailure, InvalidArgument
from contact_tracing.core.ids import check_user_id
from contact_tracing.schemas.interactions import InteractionRecord
from contact_tracing.schemas.trace import TraceResult
from contact_tracing.store.base import InteractionLog, UserDirectory

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14
MIN_WINDOW_DAYS = 1
MAX_WINDOW_DAYS = 90
WINDOW_ERROR = f"windowDays must be between {MIN_WINDOW_DAYS} and {MAX_WINDOW_DAYS}"


def resolve_subject_id(value: object) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidArgument("caseUserId required")
    if not isinstance(value, int):
        text = str(value).strip()
        if not text:
            raise InvalidArgument("caseUserId required")
        try:
            value = int(text)
        except ValueError:
            raise InvalidArgument("caseUserId must be a user id") from None
    return check_user_id(value, "caseUserId")


def resolve_window_days(value: object, default: int = DEFAULT_WINDOW_DAYS) -> int:
    """Absent or non-numeric -> default; numeric must be a whole number in range."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        text = value.strip()
        try:
            value = float(text)
        except ValueError:
            return default
    if not isinstance(value, (int, float)):
        return default
    if isinstance(value, float):
        if math.isnan(value):
            return default
        if not value.is_integer():
            raise InvalidArgument(WINDOW_ERROR)
    days = int(value)
    if days < MIN_WINDOW_DAYS or days > MAX_WINDOW_DAYS:
        raise InvalidArgument(WINDOW_ERROR)
    return days


def other_party(record: InteractionRecord, subject_id: int) -> int:
    if record.user_id == subject_id:
        return record.contact_user_id
    return record.user_id


def _recency(record: InteractionRecord):
    return (record.when_ts, record.id)


def latest_per_contact(
    records: List[InteractionRecord], subject_id: int, cutoff: datetime
) -> Dict[int, InteractionRecord]:
    """Most recent record at or after ``cutoff`` for each counterpart of the subject."""
    latest: Dict[int, InteractionRecord] = {}
    for record in records:
        if subject_id not in (record.user_id, record.contact_user_id):
            continue
        if record.when_ts < cutoff:
            continue
        other = other_party(record, subject_id)
        if other == subject_id:
            # self-interaction
            continue
        kept = latest.get(other)
        if kept is None or _recency(record) > _recency(kept):
            latest[other] = record
    return latest


def trace_contacts(
    subject_id: object,
    window_days: object = None,
    *,
    interactions: InteractionLog,
    users: UserDirectory,
    default_window_days: int = DEFAULT_WINDOW_DAYS,
    clock: Optional[Callable[[], datetime]] = None,
) -> List[TraceResult]:
    subject = resolve_subject_id(subject_id)
    days = resolve_window_days(window_days, default=default_window_days)
    now = as_utc((clock or utcnow)())
    cutoff = now - timedelta(days=days)

    try:
        records = interactions.interactions_for_user(subject)
    except DependencyFailure:
        raise
    except Exception as exc:
        raise DependencyFailure(f"interaction log unavailable: {exc}") from exc

    latest = latest_per_contact(records, subject, cutoff)
    if not latest:
        logger.info("trace subject=%s window=%sd contacts=0", subject, days)
        return []

    try:
        names = users.display_names(latest.keys())
    except DependencyFailure:
        raise
    except Exception as exc:
        raise DependencyFailure(f"user directory unavailable: {exc}") from exc

    results = [
        TraceResult(
            contact_id=contact_id,
            display_name=names.get(contact_id) or str(contact_id),
            last_contact_at=record.when_ts,
            duration_minutes=record.duration_minutes or 0,
        )
        for contact_id, record in latest.items()
    ]
    results.sort(key=lambda r: (-r.last_contact_at.timestamp(), r.contact_id))
    logger.info("trace subject=%s window=%sd contacts=%d", subject, days, len(results))
    return results

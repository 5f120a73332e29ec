# contact_tracing/services/interactions.py
from typing import List, Optional

from contact_tracing.core.clock import parse_timestamp, utcnow
from contact_tracing.core.errors import InvalidArgument
from contact_tracing.core.ids import check_user_id
from contact_tracing.schemas.interactions import InteractionRecord
from contact_tracing.store.base import InteractionLog


def log_interaction(
    log: InteractionLog,
    *,
    actor_id: int,
    counterpart_id: Optional[int],
    when: Optional[object] = None,
    duration_minutes: Optional[int] = None,
    notes: Optional[str] = None,
) -> InteractionRecord:
    if counterpart_id is None:
        raise InvalidArgument("contactUserId required")
    check_user_id(counterpart_id, "contactUserId")
    duration = duration_minutes or 0
    if duration < 0:
        raise InvalidArgument("durationMinutes must be non-negative")
    try:
        when_ts = parse_timestamp(when) or utcnow()
    except ValueError:
        raise InvalidArgument("when must be an ISO-8601 timestamp") from None
    notes = (notes or "").strip() or None
    return log.add_interaction(
        user_id=actor_id,
        contact_user_id=counterpart_id,
        when_ts=when_ts,
        duration_minutes=duration,
        notes=notes,
    )


def interactions_visible_to(
    log: InteractionLog, *, requester_id: int, requester_role: str, target_user_id: Optional[int] = None
) -> List[InteractionRecord]:
    """Members only ever see their own; admins may look at anyone's."""
    user_id = target_user_id if (requester_role == "admin" and target_user_id) else requester_id
    return log.interactions_for_user(user_id)

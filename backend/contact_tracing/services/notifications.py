# contact_tracing/services/notifications.py
import logging
from typing import Optional

from contact_tracing.core.config import settings
from contact_tracing.core.errors import InvalidArgument, NotFound
from contact_tracing.core.ids import check_user_id
from contact_tracing.schemas.notifications import NotificationRecord
from contact_tracing.store.base import NotificationSink

logger = logging.getLogger(__name__)


def simulate_notify(
    sink: NotificationSink,
    *,
    target_user_id: Optional[int],
    triggered_by: Optional[int],
    case_id: Optional[int] = None,
    message: Optional[str] = None,
) -> NotificationRecord:
    """Record a notification for a contact. Nothing is actually delivered."""
    if target_user_id is None:
        raise InvalidArgument("userId required")
    check_user_id(target_user_id, "userId")
    check_user_id(case_id, "caseId", kind="case id")
    rec = sink.add_notification(
        user_id=target_user_id,
        message=message or settings.NOTIFY_MESSAGE,
        simulated_by=triggered_by,
        case_id=case_id or None,
    )
    logger.info("simulated notification %s to user %s (case=%s)", rec.id, target_user_id, rec.case_id)
    return rec


def mark_read(sink: NotificationSink, *, notification_id: int, user_id: int) -> NotificationRecord:
    rec = sink.mark_notification_read(notification_id, user_id)
    if rec is None:
        raise NotFound("not found")
    return rec

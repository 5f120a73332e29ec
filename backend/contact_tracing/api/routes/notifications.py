# contact_tracing/api/routes/notifications.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path

from contact_tracing.api.deps import get_current_user, get_store
from contact_tracing.core.ids import MAX_ID, MIN_ID
from contact_tracing.schemas.notifications import NotificationRecord, NotificationResponse
from contact_tracing.services.notifications import mark_read
from contact_tracing.store.base import Store

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationRecord])
def list_notifications(user: Dict[str, Any] = Depends(get_current_user), store: Store = Depends(get_store)):
    return store.notifications_for_user(user["id"])


@router.post("/{id}/mark-read", response_model=NotificationResponse)
def mark_notification_read(
    id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    user: Dict[str, Any] = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    rec = mark_read(store, notification_id=id, user_id=user["id"])
    return {"ok": True, "notification": rec}

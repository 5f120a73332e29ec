from typing import Any, Optional
from pydantic import BaseModel

from contact_tracing.core.clock import UTCDateTime


# ---------- RECORDS ----------
class InteractionRecord(BaseModel):
    id: int
    user_id: int
    contact_user_id: int
    when_ts: UTCDateTime
    duration_minutes: int = 0
    notes: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True
        frozen = True


class InteractionDetail(InteractionRecord):
    """Admin listing row: the record with both usernames joined in."""

    user_username: Optional[str] = None
    contact_username: Optional[str] = None


# ---------- IN MODELS ----------
class InteractionCreate(BaseModel):
    contactUserId: Optional[int] = None
    when: Optional[Any] = None
    durationMinutes: Optional[int] = None
    notes: Optional[str] = None


# POST response
class InteractionCreated(BaseModel):
    ok: bool = True
    id: int

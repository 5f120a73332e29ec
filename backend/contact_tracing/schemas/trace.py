from typing import Any, Optional
from pydantic import BaseModel, Field

from contact_tracing.core.clock import UTCDateTime


class TraceRequest(BaseModel):
    # left loose on purpose: the tracing service owns validation and defaults
    caseUserId: Optional[Any] = None
    windowDays: Optional[Any] = None


class TraceResult(BaseModel):
    """One primary contact: the most recent qualifying interaction with them."""

    contact_id: int = Field(alias="contactId")
    display_name: str = Field(alias="displayName")
    last_contact_at: UTCDateTime = Field(alias="lastContactAt")
    duration_minutes: int = Field(default=0, alias="durationMinutes")

    class Config:
        populate_by_name = True
        frozen = True

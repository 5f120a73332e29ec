from typing import Optional
from pydantic import BaseModel

from contact_tracing.core.clock import UTCDateTime


class NotificationRecord(BaseModel):
    id: int
    user_id: int
    message: str
    simulated_by: Optional[int] = None
    case_id: Optional[int] = None
    created_at: Optional[UTCDateTime] = None
    read: bool = False

    class Config:
        from_attributes = True


class NotificationTemplateRecord(BaseModel):
    id: int
    name: str
    message: str = ""
    created_by: Optional[int] = None
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


# ---------- IN MODELS ----------
class SimulateNotifyRequest(BaseModel):
    userId: Optional[int] = None
    caseId: Optional[int] = None


class TemplateCreate(BaseModel):
    name: Optional[str] = None
    message: Optional[str] = None


# ---------- RESPONSES ----------
class NotificationResponse(BaseModel):
    ok: bool = True
    notification: NotificationRecord


class TemplateResponse(BaseModel):
    ok: bool = True
    template: NotificationTemplateRecord

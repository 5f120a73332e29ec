from typing import Any, Optional
from pydantic import BaseModel

from contact_tracing.core.clock import UTCDateTime


class CaseRecord(BaseModel):
    id: int
    user_id: int
    reported_by: Optional[int] = None
    reported_at: UTCDateTime
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True
        frozen = True


class CaseDetail(CaseRecord):
    username: Optional[str] = None


class CaseCreate(BaseModel):
    userId: Optional[int] = None
    reportedAt: Optional[Any] = None


class CaseCreated(BaseModel):
    ok: bool = True
    case: CaseRecord

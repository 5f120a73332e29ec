# contact_tracing/api/routes/admin.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from contact_tracing.api.deps import get_store, require_admin
from contact_tracing.core.config import settings
from contact_tracing.schemas.cases import CaseCreate, CaseCreated, CaseDetail
from contact_tracing.schemas.interactions import InteractionDetail
from contact_tracing.schemas.notifications import (
    NotificationResponse,
    NotificationTemplateRecord,
    SimulateNotifyRequest,
    TemplateCreate,
    TemplateResponse,
)
from contact_tracing.schemas.trace import TraceRequest, TraceResult
from contact_tracing.schemas.users import AdminUserOut
from contact_tracing.services.cases import report_case
from contact_tracing.services.notifications import simulate_notify
from contact_tracing.services.tracing import trace_contacts
from contact_tracing.store.base import Store

router = APIRouter(prefix="/admin", tags=["admin"])


# POST /api/admin/trace - distinct primary contacts of caseUserId within windowDays
@router.post("/trace", response_model=List[TraceResult])
def trace(payload: TraceRequest, admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    return trace_contacts(
        payload.caseUserId,
        payload.windowDays,
        interactions=store,
        users=store,
        default_window_days=settings.TRACE_DEFAULT_WINDOW_DAYS,
    )


# POST /api/admin/cases - report a case
@router.post("/cases", response_model=CaseCreated)
def create_case(payload: CaseCreate, admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    case = report_case(store, subject_id=payload.userId, reported_by=admin["id"], reported_at=payload.reportedAt)
    return {"ok": True, "case": case}


# GET /api/admin/cases - newest report first
@router.get("/cases", response_model=List[CaseDetail])
def list_cases(admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    return store.list_cases()


# POST /api/admin/simulate-notify - record (never send) a notification to a contact
@router.post("/simulate-notify", response_model=NotificationResponse)
def simulate(payload: SimulateNotifyRequest, admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    rec = simulate_notify(store, target_user_id=payload.userId, triggered_by=admin["id"], case_id=payload.caseId)
    return {"ok": True, "notification": rec}


@router.get("/users", response_model=List[AdminUserOut])
def list_users(admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    return [AdminUserOut(**u.model_dump()) for u in store.list_users()]


@router.get("/interactions", response_model=List[InteractionDetail])
def list_interactions(admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    return store.list_interactions()


@router.get("/notification-templates", response_model=List[NotificationTemplateRecord])
def list_templates(admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    return store.list_templates()


@router.post("/notification-templates", response_model=TemplateResponse)
def create_template(payload: TemplateCreate, admin: Dict[str, Any] = Depends(require_admin), store: Store = Depends(get_store)):
    rec = store.add_template(name=payload.name, message=payload.message, created_by=admin["id"])
    return {"ok": True, "template": rec}

# contact_tracing/api/routes/interactions.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from contact_tracing.api.deps import get_current_user, get_store
from contact_tracing.core.ids import MAX_ID, MIN_ID
from contact_tracing.schemas.interactions import InteractionCreate, InteractionCreated, InteractionRecord
from contact_tracing.services.interactions import interactions_visible_to, log_interaction
from contact_tracing.store.base import Store

router = APIRouter(prefix="/interactions", tags=["interactions"])


# POST /api/interactions (logged by the signed-in user)
@router.post("", response_model=InteractionCreated)
def create_interaction(
    payload: InteractionCreate,
    user: Dict[str, Any] = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    row = log_interaction(
        store,
        actor_id=user["id"],
        counterpart_id=payload.contactUserId,
        when=payload.when,
        duration_minutes=payload.durationMinutes,
        notes=payload.notes,
    )
    return {"ok": True, "id": row.id}


# GET /api/interactions (admins may pass ?userId=)
@router.get("", response_model=List[InteractionRecord])
def list_interactions(
    user_id: Optional[int] = Query(None, alias="userId", ge=MIN_ID, le=MAX_ID),
    user: Dict[str, Any] = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    return interactions_visible_to(
        store, requester_id=user["id"], requester_role=user["role"], target_user_id=user_id
    )

# contact_tracing/api/routes/auth.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from contact_tracing.api.deps import get_current_user, get_store
from contact_tracing.schemas.users import AuthResponse, Credentials, MeResponse, SignupRequest, UserOut
from contact_tracing.services import accounts
from contact_tracing.store.base import Store

router = APIRouter(prefix="/auth", tags=["auth"])


# POST /api/auth/signup (members only; admins come from the CLI)
@router.post("/signup", response_model=AuthResponse)
def signup(payload: SignupRequest, store: Store = Depends(get_store)):
    return accounts.signup(store, username=payload.username, password=payload.password, role=payload.role)


# POST /api/auth/login
@router.post("/login", response_model=AuthResponse)
def login(payload: Credentials, store: Store = Depends(get_store)):
    return accounts.login(store, username=payload.username, password=payload.password)


# GET /api/auth/me
@router.get("/me", response_model=MeResponse)
def me(user: Dict[str, Any] = Depends(get_current_user)):
    return {"user": user}


# GET /api/auth/users (any signed-in user, e.g. to pick a contact)
@router.get("/users", response_model=List[UserOut])
def list_users(user: Dict[str, Any] = Depends(get_current_user), store: Store = Depends(get_store)):
    return [UserOut(id=u.id, username=u.username, role=u.role) for u in store.list_users()]

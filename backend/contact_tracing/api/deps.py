# contact_tracing/api/deps.py
from typing import Any, Dict, Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contact_tracing.core.errors import Forbidden, Unauthorized
from contact_tracing.core.security import decode_token
from contact_tracing.store.base import Store

bearer = HTTPBearer(auto_error=False)


def get_store(request: Request) -> Generator[Store, None, None]:
    """
    Usage in routes:
        def endpoint(store: Store = Depends(get_store)):
            ...
    """
    with request.app.state.stores.session() as store:
        yield store


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("missing token")
    return decode_token(credentials.credentials)


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise Forbidden("admin only")
    return user

# backend/contact_tracing/core/security.py
from datetime import timedelta
from typing import Any, Dict

import bcrypt
import jwt

from contact_tracing.core.clock import utcnow
from contact_tracing.core.config import settings
from contact_tracing.core.errors import Unauthorized


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def issue_token(*, user_id: int, username: str, role: str) -> str:
    now = utcnow()
    payload = {
        "id": user_id,
        "username": username,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Return the user claims ``{id, username, role}`` carried by a token."""
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise Unauthorized("invalid token") from exc
    if "id" not in claims or "role" not in claims:
        raise Unauthorized("invalid token")
    return {"id": claims["id"], "username": claims.get("username"), "role": claims["role"]}

"""Signup, login and the admin bootstrap helpers used by the CLI."""

import logging
from typing import Optional, Tuple

from contact_tracing.core.errors import Forbidden, InvalidArgument
from contact_tracing.core.security import hash_password, issue_token, verify_password
from contact_tracing.schemas.users import AuthResponse, UserOut, UserRecord
from contact_tracing.store.base import UserDirectory

logger = logging.getLogger(__name__)

ADMIN = "admin"
MEMBER = "member"

DEMO_USERS = (
    ("admin", "admin", ADMIN),
    ("user1", "password", MEMBER),
)


def _auth_response(user: UserRecord) -> AuthResponse:
    token = issue_token(user_id=user.id, username=user.username, role=user.role)
    return AuthResponse(token=token, user=UserOut(id=user.id, username=user.username, role=user.role))


def _require_credentials(username: Optional[str], password: Optional[str]) -> Tuple[str, str]:
    username = (username or "").strip()
    if not username or not password:
        raise InvalidArgument("username and password required")
    return username, password


def signup(users: UserDirectory, *, username: Optional[str], password: Optional[str], role: Optional[str] = None) -> AuthResponse:
    username, password = _require_credentials(username, password)
    if role == ADMIN:
        raise Forbidden("Admin accounts cannot be created via signup. Contact system administrator.")
    user = users.create_user(username=username, password_hash=hash_password(password), role=MEMBER)
    logger.info("signup: user %s (%s)", user.id, user.username)
    return _auth_response(user)


def login(users: UserDirectory, *, username: Optional[str], password: Optional[str]) -> AuthResponse:
    username, password = _require_credentials(username, password)
    account = users.find_account(username)
    if account is None or not verify_password(password, account.password_hash):
        raise InvalidArgument("invalid credentials")
    return _auth_response(account.public())


def create_admin(users: UserDirectory, *, username: str, password: str) -> Tuple[str, UserRecord]:
    """Returns ("exists" | "promoted" | "created", user)."""
    username, password = _require_credentials(username, password)
    account = users.find_account(username)
    if account is not None:
        if account.role == ADMIN:
            return "exists", account.public()
        user = users.update_account(username, password_hash=hash_password(password), role=ADMIN)
        return "promoted", user
    user = users.create_user(username=username, password_hash=hash_password(password), role=ADMIN)
    return "created", user


def set_password(users: UserDirectory, *, username: str, password: str) -> Optional[UserRecord]:
    username, password = _require_credentials(username, password)
    return users.update_account(username, password_hash=hash_password(password))


def seed_demo_users(users: UserDirectory) -> int:
    """Add the demo admin and member to an empty directory."""
    if users.count_users() > 0:
        return 0
    for username, password, role in DEMO_USERS:
        users.create_user(username=username, password_hash=hash_password(password), role=role)
    logger.info("seeded %d demo users", len(DEMO_USERS))
    return len(DEMO_USERS)

from typing import List, Optional
from pydantic import BaseModel

from contact_tracing.core.clock import UTCDateTime


# ---------- RECORDS ----------
class UserRecord(BaseModel):
    id: int
    username: str
    role: str = "member"
    created_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


class UserAccount(UserRecord):
    """A user plus the stored password hash; never returned to clients."""

    password_hash: str

    def public(self) -> UserRecord:
        return UserRecord(id=self.id, username=self.username, role=self.role, created_at=self.created_at)


# ---------- OUT MODELS ----------
class UserOut(BaseModel):
    id: int
    username: str
    role: str


class AdminUserOut(UserOut):
    created_at: Optional[UTCDateTime] = None


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserOut


class UserList(BaseModel):
    items: List[UserOut]


# ---------- IN MODELS ----------
class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(Credentials):
    role: Optional[str] = None

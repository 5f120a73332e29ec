# contact_tracing/crud/users.py
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from contact_tracing.models.user import User


def get_by_username(db: Session, username: str) -> Optional[User]:
    if not username:
        return None
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def create(db: Session, *, username: str, password_hash: str, role: str = "member") -> User:
    row = User(username=username, password_hash=password_hash, role=role)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_account(
    db: Session, username: str, *, password_hash: Optional[str] = None, role: Optional[str] = None
) -> Optional[User]:
    row = get_by_username(db, username)
    if row is None:
        return None
    if password_hash is not None:
        row.password_hash = password_hash
    if role is not None:
        row.role = role
    db.commit()
    db.refresh(row)
    return row


def list_all(db: Session) -> List[User]:
    return db.execute(select(User).order_by(User.username)).scalars().all()


def count_all(db: Session) -> int:
    return db.execute(select(func.count()).select_from(User)).scalar_one()


def usernames_for_ids(db: Session, ids: Iterable[int]) -> Dict[int, str]:
    """Fetch usernames for a set of ids, returned as {id: username}."""
    ids = list({i for i in ids if i is not None})
    if not ids:
        return {}
    rows = db.execute(select(User.id, User.username).where(User.id.in_(ids))).all()
    return {r[0]: r[1] for r in rows}

# contact_tracing/crud/cases.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from contact_tracing.models.case import Case
from contact_tracing.models.user import User


def create(db: Session, *, user_id: int, reported_by: Optional[int], reported_at: datetime) -> Case:
    row = Case(user_id=user_id, reported_by=reported_by, reported_at=reported_at)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_with_usernames(db: Session) -> List[Tuple[Case, Optional[str]]]:
    rows = db.execute(
        select(Case, User.username)
        .outerjoin(User, User.id == Case.user_id)
        .order_by(desc(Case.reported_at), desc(Case.id))
    ).all()
    return [(r[0], r[1]) for r in rows]

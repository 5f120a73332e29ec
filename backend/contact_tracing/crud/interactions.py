# contact_tracing/crud/interactions.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session, aliased

from contact_tracing.models.interaction import Interaction
from contact_tracing.models.user import User


def log_interaction(
    db: Session,
    *,
    user_id: int,
    contact_user_id: int,
    when_ts: datetime,
    duration_minutes: int = 0,
    notes: Optional[str] = None,
) -> Interaction:
    row = Interaction(
        user_id=user_id,
        contact_user_id=contact_user_id,
        when_ts=when_ts,
        duration_minutes=duration_minutes,
        notes=notes,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def for_user(db: Session, user_id: int) -> List[Interaction]:
    """Every interaction where the user is either party, newest first."""
    return (
        db.execute(
            select(Interaction)
            .where(or_(Interaction.user_id == user_id, Interaction.contact_user_id == user_id))
            .order_by(desc(Interaction.when_ts), desc(Interaction.id))
        )
        .scalars()
        .all()
    )


def list_with_usernames(db: Session) -> List[Tuple[Interaction, Optional[str], Optional[str]]]:
    owner = aliased(User)
    counterpart = aliased(User)
    rows = db.execute(
        select(Interaction, owner.username, counterpart.username)
        .outerjoin(owner, Interaction.user_id == owner.id)
        .outerjoin(counterpart, Interaction.contact_user_id == counterpart.id)
        .order_by(desc(Interaction.when_ts), desc(Interaction.id))
    ).all()
    return [(r[0], r[1], r[2]) for r in rows]

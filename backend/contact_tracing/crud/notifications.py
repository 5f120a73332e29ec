# contact_tracing/crud/notifications.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from contact_tracing.models.notification import Notification, NotificationTemplate


def create(
    db: Session, *, user_id: int, message: str, simulated_by: Optional[int], case_id: Optional[int]
) -> Notification:
    row = Notification(user_id=user_id, message=message, simulated_by=simulated_by, case_id=case_id, read=False)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def for_user(db: Session, user_id: int) -> List[Notification]:
    return (
        db.execute(select(Notification).where(Notification.user_id == user_id).order_by(Notification.id))
        .scalars()
        .all()
    )


def mark_read(db: Session, notification_id: int, user_id: int) -> Optional[Notification]:
    row = db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_id == user_id)
    ).scalar_one_or_none()
    if row is None:
        return None
    row.read = True
    db.commit()
    db.refresh(row)
    return row


def list_templates(db: Session) -> List[NotificationTemplate]:
    return db.execute(select(NotificationTemplate).order_by(NotificationTemplate.id)).scalars().all()


def create_template(
    db: Session, *, name: Optional[str], message: Optional[str], created_by: Optional[int]
) -> NotificationTemplate:
    row = NotificationTemplate(name=name or "", message=message or "", created_by=created_by)
    db.add(row)
    db.flush()
    if not name:
        row.name = f"template-{row.id}"
    db.commit()
    db.refresh(row)
    return row

# contact_tracing/store/sql.py
from __future__ import annotations

import functools
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contact_tracing.core.clock import as_utc
from contact_tracing.core.errors import Conflict, DependencyFailure
from contact_tracing.crud import cases as crud_cases
from contact_tracing.crud import interactions as crud_interactions
from contact_tracing.crud import notifications as crud_notifications
from contact_tracing.crud import users as crud_users
from contact_tracing.schemas.cases import CaseDetail, CaseRecord
from contact_tracing.schemas.interactions import InteractionDetail, InteractionRecord
from contact_tracing.schemas.notifications import NotificationRecord, NotificationTemplateRecord
from contact_tracing.schemas.users import UserAccount, UserRecord

logger = logging.getLogger(__name__)


def _guarded(method):
    """Turn database errors into DependencyFailure, rolling back the session."""

    @functools.wraps(method)
    def wrapper(self: "SqlStore", *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DependencyFailure(f"database error in {method.__name__}: {exc}") from exc

    return wrapper


class SqlStore:
    """Store backed by one SQLAlchemy session (one per request)."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---- users ----
    @_guarded
    def create_user(self, *, username: str, password_hash: str, role: str = "member") -> UserRecord:
        if crud_users.get_by_username(self.db, username) is not None:
            raise Conflict("username exists")
        row = crud_users.create(self.db, username=username, password_hash=password_hash, role=role)
        return UserRecord.model_validate(row)

    @_guarded
    def find_account(self, username: str) -> Optional[UserAccount]:
        row = crud_users.get_by_username(self.db, username)
        return UserAccount.model_validate(row) if row else None

    @_guarded
    def update_account(
        self, username: str, *, password_hash: Optional[str] = None, role: Optional[str] = None
    ) -> Optional[UserRecord]:
        row = crud_users.update_account(self.db, username, password_hash=password_hash, role=role)
        return UserRecord.model_validate(row) if row else None

    @_guarded
    def list_users(self) -> List[UserRecord]:
        return [UserRecord.model_validate(r) for r in crud_users.list_all(self.db)]

    @_guarded
    def count_users(self) -> int:
        return crud_users.count_all(self.db)

    @_guarded
    def display_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        return crud_users.usernames_for_ids(self.db, user_ids)

    # ---- interactions ----
    @_guarded
    def add_interaction(
        self,
        *,
        user_id: int,
        contact_user_id: int,
        when_ts: datetime,
        duration_minutes: int = 0,
        notes: Optional[str] = None,
    ) -> InteractionRecord:
        row = crud_interactions.log_interaction(
            self.db,
            user_id=user_id,
            contact_user_id=contact_user_id,
            when_ts=as_utc(when_ts),
            duration_minutes=duration_minutes,
            notes=notes,
        )
        return InteractionRecord.model_validate(row)

    @_guarded
    def interactions_for_user(self, user_id: int) -> List[InteractionRecord]:
        return [InteractionRecord.model_validate(r) for r in crud_interactions.for_user(self.db, user_id)]

    @_guarded
    def list_interactions(self) -> List[InteractionDetail]:
        out = []
        for row, owner, counterpart in crud_interactions.list_with_usernames(self.db):
            record = InteractionRecord.model_validate(row)
            out.append(InteractionDetail(**record.model_dump(), user_username=owner, contact_username=counterpart))
        return out

    # ---- cases ----
    @_guarded
    def add_case(self, *, user_id: int, reported_by: Optional[int], reported_at: datetime) -> CaseRecord:
        row = crud_cases.create(self.db, user_id=user_id, reported_by=reported_by, reported_at=as_utc(reported_at))
        return CaseRecord.model_validate(row)

    @_guarded
    def list_cases(self) -> List[CaseDetail]:
        return [
            CaseDetail(**CaseRecord.model_validate(row).model_dump(), username=username)
            for row, username in crud_cases.list_with_usernames(self.db)
        ]

    # ---- notifications ----
    @_guarded
    def add_notification(
        self, *, user_id: int, message: str, simulated_by: Optional[int], case_id: Optional[int]
    ) -> NotificationRecord:
        row = crud_notifications.create(
            self.db, user_id=user_id, message=message, simulated_by=simulated_by, case_id=case_id
        )
        return NotificationRecord.model_validate(row)

    @_guarded
    def notifications_for_user(self, user_id: int) -> List[NotificationRecord]:
        return [NotificationRecord.model_validate(r) for r in crud_notifications.for_user(self.db, user_id)]

    @_guarded
    def mark_notification_read(self, notification_id: int, user_id: int) -> Optional[NotificationRecord]:
        row = crud_notifications.mark_read(self.db, notification_id, user_id)
        return NotificationRecord.model_validate(row) if row else None

    @_guarded
    def list_templates(self) -> List[NotificationTemplateRecord]:
        return [NotificationTemplateRecord.model_validate(r) for r in crud_notifications.list_templates(self.db)]

    @_guarded
    def add_template(
        self, *, name: Optional[str], message: Optional[str], created_by: Optional[int]
    ) -> NotificationTemplateRecord:
        row = crud_notifications.create_template(self.db, name=name, message=message, created_by=created_by)
        return NotificationTemplateRecord.model_validate(row)

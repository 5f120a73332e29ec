# contact_tracing/store/memory.py
from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional

from contact_tracing.core.clock import utcnow
from contact_tracing.core.errors import Conflict
from contact_tracing.schemas.cases import CaseDetail, CaseRecord
from contact_tracing.schemas.interactions import InteractionDetail, InteractionRecord
from contact_tracing.schemas.notifications import NotificationRecord, NotificationTemplateRecord
from contact_tracing.schemas.users import UserAccount, UserRecord

logger = logging.getLogger(__name__)


class MemoryStore:
    """Process-local store holding every record in lists.

    One instance is created per app (see ``main.create_app``) and shared by
    all requests; only test harnesses call :meth:`reset`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self._users: List[UserAccount] = []
            self._interactions: List[InteractionRecord] = []
            self._cases: List[CaseRecord] = []
            self._notifications: List[NotificationRecord] = []
            self._templates: List[NotificationTemplateRecord] = []
            self._ids = {name: itertools.count(1) for name in ("users", "interactions", "cases", "notifications", "templates")}

    # ---- provider protocol (see store.provider) ----
    def prepare(self) -> None:
        logger.info("[STORE] Using in-memory store")

    @contextmanager
    def session(self) -> Iterator["MemoryStore"]:
        yield self

    # ---- users ----
    def create_user(self, *, username: str, password_hash: str, role: str = "member") -> UserRecord:
        with self._lock:
            if any(u.username == username for u in self._users):
                raise Conflict("username exists")
            account = UserAccount(
                id=next(self._ids["users"]),
                username=username,
                password_hash=password_hash,
                role=role,
                created_at=utcnow(),
            )
            self._users.append(account)
        return account.public()

    def find_account(self, username: str) -> Optional[UserAccount]:
        return next((u for u in self._users if u.username == username), None)

    def update_account(
        self, username: str, *, password_hash: Optional[str] = None, role: Optional[str] = None
    ) -> Optional[UserRecord]:
        with self._lock:
            for idx, account in enumerate(self._users):
                if account.username != username:
                    continue
                changes = {}
                if password_hash is not None:
                    changes["password_hash"] = password_hash
                if role is not None:
                    changes["role"] = role
                self._users[idx] = account.model_copy(update=changes)
                return self._users[idx].public()
        return None

    def list_users(self) -> List[UserRecord]:
        return [u.public() for u in sorted(self._users, key=lambda u: u.username)]

    def count_users(self) -> int:
        return len(self._users)

    def display_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        wanted = set(user_ids)
        return {u.id: u.username for u in self._users if u.id in wanted}

    # ---- interactions ----
    def add_interaction(
        self,
        *,
        user_id: int,
        contact_user_id: int,
        when_ts: datetime,
        duration_minutes: int = 0,
        notes: Optional[str] = None,
    ) -> InteractionRecord:
        with self._lock:
            row = InteractionRecord(
                id=next(self._ids["interactions"]),
                user_id=user_id,
                contact_user_id=contact_user_id,
                when_ts=when_ts,
                duration_minutes=duration_minutes,
                notes=notes,
                created_at=utcnow(),
            )
            self._interactions.append(row)
        return row

    def interactions_for_user(self, user_id: int) -> List[InteractionRecord]:
        rows = [i for i in self._interactions if user_id in (i.user_id, i.contact_user_id)]
        return sorted(rows, key=lambda i: (i.when_ts, i.id), reverse=True)

    def list_interactions(self) -> List[InteractionDetail]:
        names = {u.id: u.username for u in self._users}
        rows = sorted(self._interactions, key=lambda i: (i.when_ts, i.id), reverse=True)
        return [
            InteractionDetail(
                **i.model_dump(),
                user_username=names.get(i.user_id),
                contact_username=names.get(i.contact_user_id),
            )
            for i in rows
        ]

    # ---- cases ----
    def add_case(self, *, user_id: int, reported_by: Optional[int], reported_at: datetime) -> CaseRecord:
        with self._lock:
            row = CaseRecord(
                id=next(self._ids["cases"]),
                user_id=user_id,
                reported_by=reported_by,
                reported_at=reported_at,
                created_at=utcnow(),
            )
            self._cases.append(row)
        return row

    def list_cases(self) -> List[CaseDetail]:
        names = {u.id: u.username for u in self._users}
        rows = sorted(self._cases, key=lambda c: (c.reported_at, c.id), reverse=True)
        return [CaseDetail(**c.model_dump(), username=names.get(c.user_id)) for c in rows]

    # ---- notifications ----
    def add_notification(
        self, *, user_id: int, message: str, simulated_by: Optional[int], case_id: Optional[int]
    ) -> NotificationRecord:
        with self._lock:
            row = NotificationRecord(
                id=next(self._ids["notifications"]),
                user_id=user_id,
                message=message,
                simulated_by=simulated_by,
                case_id=case_id,
                created_at=utcnow(),
                read=False,
            )
            self._notifications.append(row)
        return row

    def notifications_for_user(self, user_id: int) -> List[NotificationRecord]:
        return [n for n in self._notifications if n.user_id == user_id]

    def mark_notification_read(self, notification_id: int, user_id: int) -> Optional[NotificationRecord]:
        with self._lock:
            for idx, n in enumerate(self._notifications):
                if n.id == notification_id and n.user_id == user_id:
                    self._notifications[idx] = n.model_copy(update={"read": True})
                    return self._notifications[idx]
        return None

    def list_templates(self) -> List[NotificationTemplateRecord]:
        return list(self._templates)

    def add_template(
        self, *, name: Optional[str], message: Optional[str], created_by: Optional[int]
    ) -> NotificationTemplateRecord:
        with self._lock:
            template_id = next(self._ids["templates"])
            row = NotificationTemplateRecord(
                id=template_id,
                name=name or f"template-{template_id}",
                message=message or "",
                created_by=created_by,
                created_at=utcnow(),
            )
            self._templates.append(row)
        return row

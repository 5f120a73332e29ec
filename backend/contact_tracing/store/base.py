"""Collaborator interfaces the services are written against.

Two backends implement them: ``store.sql`` over SQLAlchemy and
``store.memory`` over plain lists. Both must give the tracing service the
same answers for the same records.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol

from contact_tracing.schemas.cases import CaseDetail, CaseRecord
from contact_tracing.schemas.interactions import InteractionDetail, InteractionRecord
from contact_tracing.schemas.notifications import NotificationRecord, NotificationTemplateRecord
from contact_tracing.schemas.users import UserAccount, UserRecord


class UserDirectory(Protocol):
    def create_user(self, *, username: str, password_hash: str, role: str = "member") -> UserRecord:
        """Raises Conflict when the username is taken."""
        ...

    def find_account(self, username: str) -> Optional[UserAccount]:
        ...

    def update_account(
        self, username: str, *, password_hash: Optional[str] = None, role: Optional[str] = None
    ) -> Optional[UserRecord]:
        ...

    def list_users(self) -> List[UserRecord]:
        """All users ordered by username."""
        ...

    def count_users(self) -> int:
        ...

    def display_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        """Resolve many ids at once; unknown ids are left out, never an error."""
        ...


class InteractionLog(Protocol):
    def add_interaction(
        self,
        *,
        user_id: int,
        contact_user_id: int,
        when_ts: datetime,
        duration_minutes: int = 0,
        notes: Optional[str] = None,
    ) -> InteractionRecord:
        ...

    def interactions_for_user(self, user_id: int) -> List[InteractionRecord]:
        """Every record where the user is either party, newest first."""
        ...

    def list_interactions(self) -> List[InteractionDetail]:
        ...


class CaseRegister(Protocol):
    def add_case(self, *, user_id: int, reported_by: Optional[int], reported_at: datetime) -> CaseRecord:
        ...

    def list_cases(self) -> List[CaseDetail]:
        """Newest report first."""
        ...


class NotificationSink(Protocol):
    def add_notification(
        self, *, user_id: int, message: str, simulated_by: Optional[int], case_id: Optional[int]
    ) -> NotificationRecord:
        ...

    def notifications_for_user(self, user_id: int) -> List[NotificationRecord]:
        ...

    def mark_notification_read(self, notification_id: int, user_id: int) -> Optional[NotificationRecord]:
        """None when the notification is missing or belongs to someone else."""
        ...

    def list_templates(self) -> List[NotificationTemplateRecord]:
        ...

    def add_template(
        self, *, name: Optional[str], message: Optional[str], created_by: Optional[int]
    ) -> NotificationTemplateRecord:
        ...


class Store(UserDirectory, InteractionLog, CaseRegister, NotificationSink, Protocol):
    """Everything a request handler may need, bundled."""

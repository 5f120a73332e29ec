# contact_tracing/services/cases.py
import logging
from typing import Optional

from contact_tracing.core.clock import parse_timestamp, utcnow
from contact_tracing.core.errors import InvalidArgument
from contact_tracing.core.ids import check_user_id
from contact_tracing.schemas.cases import CaseRecord
from contact_tracing.store.base import CaseRegister

logger = logging.getLogger(__name__)


def report_case(
    register: CaseRegister, *, subject_id: Optional[int], reported_by: Optional[int], reported_at: object = None
) -> CaseRecord:
    """Append a confirmed case. Re-reporting the same subject is allowed."""
    if subject_id is None:
        raise InvalidArgument("userId required")
    check_user_id(subject_id, "userId")
    try:
        when = parse_timestamp(reported_at) or utcnow()
    except ValueError:
        raise InvalidArgument("reportedAt must be an ISO-8601 timestamp") from None
    case = register.add_case(user_id=subject_id, reported_by=reported_by, reported_at=when)
    logger.info("case %s reported for user %s by %s", case.id, subject_id, reported_by)
    return case

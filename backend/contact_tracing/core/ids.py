# backend/contact_tracing/core/ids.py
from typing import Optional

from contact_tracing.core.errors import InvalidArgument

# ids are stored in signed 64-bit INTEGER columns
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def check_user_id(value: Optional[int], field: str, kind: str = "user id") -> Optional[int]:
    """Pass None through; reject ids no row could ever have."""
    if value is None:
        return None
    if isinstance(value, bool) or not MIN_ID <= value <= MAX_ID:
        raise InvalidArgument(f"{field} must be a {kind}")
    return value

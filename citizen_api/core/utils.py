"""
Utility helpers shared across services.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import ValidationFailureError


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite hands back for DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, bumped past ``previous`` when the clock has not moved."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def require_text(value: Optional[str], field: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValidationFailureError(f"{field} is required")
    return cleaned


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None

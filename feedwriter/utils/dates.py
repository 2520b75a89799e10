"""Date helpers shared by the data models and the renderers.

Feeds carry two textual date formats: RFC 822 for RSS 2.0 and RFC 3339 for
Atom 1.0. Models store timezone-aware UTC datetimes; callers may hand in
integer epoch seconds instead.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Convert epoch seconds or a datetime into an aware UTC datetime."""
    if value is None or isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, bool):
        raise ValueError("Timestamp must be a datetime or epoch seconds, not a boolean")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return datetime.fromtimestamp(int(value.strip()), tz=timezone.utc)
    # Anything else (ISO strings, date objects) is left to pydantic
    return value


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes and normalise aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_epoch(value: datetime) -> int:
    """Integer epoch seconds for a datetime."""
    return int(ensure_utc(value).timestamp())


def format_rfc822(value: datetime) -> str:
    """Format for RSS 2.0 (``Fri, 13 Feb 2009 23:31:30 +0000``)."""
    return format_datetime(ensure_utc(value))


def format_rfc3339(value: datetime) -> str:
    """Format for Atom 1.0 (``2009-02-13T23:31:30+00:00``)."""
    return ensure_utc(value).replace(microsecond=0).isoformat()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

"""
Utilities package for the feed writer.

This package contains reusable helpers for:
- Date coercion and RFC 822 / RFC 3339 formatting
- URI classification
"""

from .dates import (
    coerce_timestamp,
    ensure_utc,
    to_epoch,
    format_rfc822,
    format_rfc3339,
    utcnow,
)
from .uri import is_absolute_uri, is_web_uri

__all__ = [
    "coerce_timestamp",
    "ensure_utc",
    "to_epoch",
    "format_rfc822",
    "format_rfc3339",
    "utcnow",
    "is_absolute_uri",
    "is_web_uri",
]

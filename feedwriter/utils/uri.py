"""URI checks used when choosing how identifiers are rendered."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit


def is_absolute_uri(value: Optional[str]) -> bool:
    """True when ``value`` has a scheme (``urn:``, ``tag:``, ``http:``...)."""
    if not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc or parts.path)


def is_web_uri(value: Optional[str]) -> bool:
    """True for absolute http(s) URLs, the only identifiers RSS treats as permalinks."""
    if not is_absolute_uri(value):
        return False
    parts = urlsplit(value)
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)

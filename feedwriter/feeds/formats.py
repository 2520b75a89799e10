"""Supported syndication formats and the XML namespaces they use."""

from enum import Enum

from ..exceptions import InvalidFormatError


class FeedFormat(str, Enum):
    """Supported feed formats"""
    RSS = "rss"
    ATOM = "atom"

    @classmethod
    def normalize(cls, value: "str | FeedFormat") -> "FeedFormat":
        """
        Case-insensitive lookup of a format name.

        Raises:
            InvalidFormatError: value names neither RSS nor Atom
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidFormatError(value)


# Namespaces
ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"
SLASH_NS = "http://purl.org/rss/1.0/modules/slash/"
WFW_NS = "http://wellformedweb.org/CommentAPI/"
THREAD_NS = "http://purl.org/syndication/thread/1.0"
TOMBSTONE_NS = "http://purl.org/atompub/tombstones/1.0"
XML_NS = "http://www.w3.org/XML/1998/namespace"

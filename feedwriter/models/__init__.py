"""
Models package for the feed writer.

This package contains all Pydantic models for:
- Entries and their value objects (authors, enclosure, categories)
- Tombstones (deleted-entry markers)
- Feed-level metadata
"""

from .entry import (
    Author,
    Category,
    CommentFeedLink,
    Enclosure,
    Entry,
)
from .tombstone import Tombstone
from .feed_metadata import FeedMetadata, Generator, Image

__all__ = [
    "Author",
    "Category",
    "CommentFeedLink",
    "Enclosure",
    "Entry",
    "Tombstone",
    "FeedMetadata",
    "Generator",
    "Image",
]

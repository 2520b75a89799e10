"""
feedwriter: build RSS 2.0 and Atom 1.0 documents from an in-memory feed.

Example:
    from feedwriter import Feed

    feed = Feed(title="News", link="https://example.com", description="Latest news")
    entry = feed.create_entry()
    entry.title = "Hello"
    entry.link = "https://example.com/hello"
    feed.add_entry(entry)
    print(feed.export("rss"))
"""

__version__ = "0.1.0"

from .exceptions import (
    FeedWriterError,
    NotFoundError,
    InvalidFormatError,
    ExportValidationError,
    MissingRequiredFieldError,
    InvalidEnclosureError,
    InvalidFieldError,
)
from .models import (
    Author,
    Category,
    CommentFeedLink,
    Enclosure,
    Entry,
    FeedMetadata,
    Generator,
    Image,
    Tombstone,
)
from .feeds import Feed, FeedFormat

__all__ = [
    "__version__",
    "Feed",
    "FeedFormat",
    "FeedMetadata",
    "Entry",
    "Tombstone",
    "Author",
    "Category",
    "CommentFeedLink",
    "Enclosure",
    "Generator",
    "Image",
    "FeedWriterError",
    "NotFoundError",
    "InvalidFormatError",
    "ExportValidationError",
    "MissingRequiredFieldError",
    "InvalidEnclosureError",
    "InvalidFieldError",
]

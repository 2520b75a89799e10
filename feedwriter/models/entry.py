"""
Entry domain model.

Represents one syndication item (article, post, episode) plus the small
value objects hanging off it: authors, enclosure, categories and comment
feed links.

Field types are coerced on construction and on assignment, but the
rules a format imposes (title or description present, complete enclosure,
category term...) are checked by the renderers at export time, so an entry
can be built up incrementally.

Responsibility: Single entry container with optional fields and per-part validation
"""

import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidEnclosureError
from ..utils.dates import coerce_timestamp, ensure_utc

# ASCII digits only; str.isdigit also accepts superscripts int() rejects
_INTEGER = re.compile(r"-?[0-9]+")


class Author(BaseModel):
    """Person credited with an entry or feed"""

    model_config = ConfigDict(validate_assignment=True)

    name: Optional[str] = Field(default=None, description="Display name (required at render time)")
    email: Optional[str] = Field(default=None)
    uri: Optional[str] = Field(default=None)


class Enclosure(BaseModel):
    """
    Media attachment reference.

    ``length`` is kept as given (int or string) so that a bad value can be
    reported as an enclosure error during export instead of failing here.
    """

    model_config = ConfigDict(validate_assignment=True)

    type: Optional[str] = Field(default=None, description="MIME type, e.g. 'audio/mpeg'")
    length: Optional[Union[int, str]] = Field(default=None, description="Size in bytes")
    uri: Optional[str] = Field(default=None)

    def validate_for_render(self) -> int:
        """
        Check that type, uri and length are all usable.

        Returns:
            The length as a non-negative integer

        Raises:
            InvalidEnclosureError: type or uri missing, length missing,
                non-numeric or negative
        """
        if not self.type:
            raise InvalidEnclosureError(
                'Enclosure "type" is not set'
            )
        if not self.uri:
            raise InvalidEnclosureError(
                'Enclosure "uri" is not set'
            )
        if self.length is None or self.length == "":
            raise InvalidEnclosureError(
                'Enclosure "length" is not set'
            )

        length = self.length
        if isinstance(length, str):
            text = length.strip()
            if not _INTEGER.fullmatch(text):
                raise InvalidEnclosureError(
                    f'Enclosure "length" must be an integer number of bytes, got {length!r}'
                )
            length = int(text)

        if length < 0:
            raise InvalidEnclosureError(
                f'Enclosure "length" must be zero or greater, got {length}'
            )
        return length


class Category(BaseModel):
    """Classification term with optional human label and scheme"""

    model_config = ConfigDict(validate_assignment=True)

    term: Optional[str] = Field(default=None, description="Category term (required at render time)")
    label: Optional[str] = Field(default=None)
    scheme: Optional[str] = Field(default=None, description="Categorisation scheme URI")

    @property
    def resolved_label(self) -> Optional[str]:
        """Label to render; falls back to the term"""
        return self.label if self.label is not None else self.term


class CommentFeedLink(BaseModel):
    """Link to a feed of comments on an entry"""

    model_config = ConfigDict(validate_assignment=True)

    uri: str
    type: str = Field(description="Feed type of the comment feed: 'rss', 'atom' or 'rdf'")

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        return v.strip().lower()


def _as_model(model_cls, value):
    if isinstance(value, model_cls):
        return value
    if isinstance(value, dict):
        return model_cls(**value)
    raise TypeError(f"Expected {model_cls.__name__} or dict, got {type(value).__name__}")


class Entry(BaseModel):
    """
    One syndication item.

    Created through ``Feed.create_entry()`` so that it inherits the feed's
    encoding and format, then appended with ``Feed.add_entry()``.

    Example:
        entry = feed.create_entry()
        entry.title = "Release 2.0"
        entry.link = "https://example.com/releases/2.0"
        entry.date_modified = 1234567890
        entry.add_category({"term": "releases"})
        feed.add_entry(entry)
    """

    model_config = ConfigDict(validate_assignment=True)

    # MARK: - Text
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None, description="Short summary")
    content: Optional[str] = Field(default=None, description="Full (HTML) content")

    # MARK: - Identity
    id: Optional[str] = Field(
        default=None,
        description="Permanent identifier; defaults to the link when rendered"
    )
    link: Optional[str] = Field(default=None)

    # MARK: - Dates
    date_created: Optional[datetime] = Field(default=None)
    date_modified: Optional[datetime] = Field(default=None)

    # MARK: - Attachments
    authors: List[Author] = Field(default_factory=list)
    enclosure: Optional[Enclosure] = Field(default=None)
    categories: List[Category] = Field(default_factory=list)

    # MARK: - Comments
    comment_link: Optional[str] = Field(default=None)
    comment_count: Optional[int] = Field(default=None, ge=0)
    comment_feed_links: List[CommentFeedLink] = Field(default_factory=list)

    # MARK: - Inherited from the feed
    encoding: Optional[str] = Field(default=None)
    type: Optional[str] = Field(default=None, description="Format the owning feed targets")

    @field_validator("date_created", "date_modified", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        """Accept integer epoch seconds as well as datetimes"""
        return coerce_timestamp(v)

    @field_validator("date_created", "date_modified")
    @classmethod
    def make_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    def add_author(self, author: Union[Author, Dict[str, Any]]) -> None:
        self.authors = [*self.authors, _as_model(Author, author)]

    def add_authors(self, authors: Iterable[Union[Author, Dict[str, Any]]]) -> None:
        for author in authors:
            self.add_author(author)

    def add_category(self, category: Union[Category, Dict[str, Any]]) -> None:
        self.categories = [*self.categories, _as_model(Category, category)]

    def add_categories(self, categories: Iterable[Union[Category, Dict[str, Any]]]) -> None:
        for category in categories:
            self.add_category(category)

    def add_comment_feed_link(self, link: Union[CommentFeedLink, Dict[str, Any]]) -> None:
        self.comment_feed_links = [*self.comment_feed_links, _as_model(CommentFeedLink, link)]

    def effective_timestamp(self, now: int) -> int:
        """
        Timestamp used when ordering entries.

        Args:
            now: Fallback epoch seconds for entries without any date

        Returns:
            dateModified, else dateCreated, else ``now`` (epoch seconds)
        """
        if self.date_modified is not None:
            return int(self.date_modified.timestamp())
        if self.date_created is not None:
            return int(self.date_created.timestamp())
        return now

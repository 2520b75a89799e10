"""
Feed-level metadata model.

The channel (RSS) / feed (Atom) properties the renderers serialise before
the entries: title, link, description, language, generator, image and so on.

Responsibility: Feed metadata container
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import coerce_timestamp, ensure_utc
from .entry import Author, Category


class Generator(BaseModel):
    """Software that produced the feed"""

    model_config = ConfigDict(validate_assignment=True)

    name: str
    version: Optional[str] = Field(default=None)
    uri: Optional[str] = Field(default=None)


class Image(BaseModel):
    """
    Feed image / logo.

    RSS 2.0 requires uri, link and title and caps width at 144 and
    height at 400 pixels. Checked at render time.
    """

    model_config = ConfigDict(validate_assignment=True)

    uri: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None)
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    width: Optional[int] = Field(default=None)
    height: Optional[int] = Field(default=None)


class FeedMetadata(BaseModel):
    """
    Channel-level properties of a feed.

    Example:
        metadata = FeedMetadata(
            title="Project news",
            link="https://example.com",
            description="Releases and announcements",
            feed_links={"rss": "https://example.com/feed.rss"}
        )
    """

    model_config = ConfigDict(validate_assignment=True)

    # MARK: - Core Fields
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None, description="Website the feed describes")
    id: Optional[str] = Field(
        default=None,
        description="Permanent feed identifier (Atom); defaults to the link"
    )

    # MARK: - Optional Fields
    language: Optional[str] = Field(default=None, description="e.g. 'en-CA'")
    copyright: Optional[str] = Field(default=None)
    generator: Optional[Generator] = Field(default=None)
    ttl: Optional[int] = Field(default=None, ge=0, description="Minutes a reader may cache the feed")
    image: Optional[Image] = Field(default=None)
    authors: List[Author] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    feed_links: Dict[str, str] = Field(
        default_factory=dict,
        description="Self links keyed by format ('rss', 'atom')"
    )

    # MARK: - Dates
    date_created: Optional[datetime] = Field(default=None)
    date_modified: Optional[datetime] = Field(default=None)
    last_build_date: Optional[datetime] = Field(default=None)

    @field_validator("date_created", "date_modified", "last_build_date", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @field_validator("date_created", "date_modified", "last_build_date")
    @classmethod
    def make_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    @field_validator("feed_links")
    @classmethod
    def normalize_link_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {key.strip().lower(): uri for key, uri in v.items()}

"""
Feed Aggregate
==============
In-memory feed: metadata plus an ordered sequence of entries and
tombstones, and the single ``export`` entry point that renders it.

Responsibility: Own the entry sequence and dispatch export to the format renderer
"""

import codecs
import logging
from typing import Iterator, List, Optional, Union

from ..config import WriterSettings
from ..exceptions import NotFoundError
from ..models import Entry, FeedMetadata, Tombstone
from ..utils.dates import utcnow
from .formats import FeedFormat
from .renderers import AbstractFeedRenderer, get_renderer

logger = logging.getLogger(__name__)

Record = Union[Entry, Tombstone]


class Feed:
    """
    Ordered collection of entries and tombstones plus feed metadata.

    Entries are created with ``create_entry()`` (inheriting the feed's
    encoding and format), filled in, then appended with ``add_entry()``.
    Nothing is validated until ``export()``.

    Removing an entry compacts the sequence: later entries move down one
    index and removed indices are never reserved.

    Example:
        feed = Feed(
            title="Project news",
            link="https://example.com",
            description="Releases and announcements"
        )
        entry = feed.create_entry()
        entry.title = "Release 2.0"
        entry.link = "https://example.com/releases/2.0"
        feed.add_entry(entry)
        xml = feed.export("rss")
    """

    def __init__(
        self,
        metadata: Optional[FeedMetadata] = None,
        encoding: Optional[str] = None,
        type: Optional[Union[str, FeedFormat]] = None,
        settings: Optional[WriterSettings] = None,
        **fields
    ):
        """
        Initialize feed.

        Args:
            metadata: Feed-level metadata; built from ``fields`` when omitted
            encoding: Document encoding (renderers default to UTF-8)
            type: Format new entries are tagged with ("rss" or "atom")
            settings: Renderer defaults (global settings when omitted)
            **fields: FeedMetadata fields (title, link, description...)
        """
        if metadata is not None and fields:
            raise TypeError("Pass either a FeedMetadata instance or metadata fields, not both")
        self.metadata = metadata or FeedMetadata(**fields)
        self.encoding = encoding
        self._type: Optional[FeedFormat] = None
        if type is not None:
            self.type = type
        self._settings = settings
        self._entries: List[Record] = []
        self._cursor = 0

    # MARK: - Attributes

    @property
    def type(self) -> Optional[str]:
        """Normalised format name ("rss" / "atom"), or None before any is chosen"""
        return self._type.value if self._type is not None else None

    @type.setter
    def type(self, value: Union[str, FeedFormat]) -> None:
        self._type = FeedFormat.normalize(value)

    @property
    def encoding(self) -> Optional[str]:
        """Document encoding, or None to use the configured default"""
        return self._encoding

    @encoding.setter
    def encoding(self, value: Optional[str]) -> None:
        if value is not None:
            try:
                codecs.lookup(value)
            except LookupError:
                raise ValueError(f"Unknown encoding: {value}")
        self._encoding = value

    # MARK: - Entry factory

    def create_entry(self) -> Entry:
        """
        Create an entry preset with this feed's encoding and format.

        The entry is NOT added to the feed.
        """
        return Entry(encoding=self.encoding, type=self.type)

    def create_tombstone(self) -> Tombstone:
        """
        Create a tombstone preset with this feed's encoding and format.

        The tombstone is NOT added to the feed.
        """
        return Tombstone(encoding=self.encoding, type=self.type)

    # MARK: - Sequence

    def add_entry(self, entry: Entry) -> None:
        """Append an entry to the end of the sequence"""
        if not isinstance(entry, Entry):
            raise TypeError(f"Expected Entry, got {type(entry).__name__}")
        self._entries.append(entry)

    def add_tombstone(self, tombstone: Tombstone) -> None:
        """Append a tombstone to the end of the sequence"""
        if not isinstance(tombstone, Tombstone):
            raise TypeError(f"Expected Tombstone, got {type(tombstone).__name__}")
        self._entries.append(tombstone)

    def get_entry(self, index: int = 0) -> Record:
        """
        Retrieve the record at a zero-based index.

        Raises:
            NotFoundError: index is negative or past the end
        """
        self._check_index(index)
        return self._entries[index]

    def remove_entry(self, index: int) -> None:
        """
        Remove the record at a zero-based index.

        Raises:
            NotFoundError: index is negative or past the end; removal is
                never silently ignored
        """
        self._check_index(index)
        del self._entries[index]

    def count(self) -> int:
        """Number of entries and tombstones in the feed"""
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Record]:
        # Snapshot, so a render is unaffected by later mutation
        return iter(list(self._entries))

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise NotFoundError(index)
        if not 0 <= index < len(self._entries):
            raise NotFoundError(index)

    # MARK: - Cursor

    def key(self) -> int:
        """Current cursor position"""
        return self._cursor

    def valid(self) -> bool:
        """True while the cursor points at an existing record"""
        return 0 <= self._cursor < self.count()

    def current(self) -> Record:
        """
        Record under the cursor.

        Raises:
            NotFoundError: cursor is past the end
        """
        return self.get_entry(self._cursor)

    def advance(self) -> None:
        """Move the cursor forward one record"""
        self._cursor += 1

    def rewind(self) -> None:
        """Reset the cursor to the first record"""
        self._cursor = 0

    # MARK: - Ordering

    def order_by_date(self) -> None:
        """
        Reorder records newest first by effective timestamp.

        The effective timestamp is dateModified, else dateCreated (the
        deletion time for tombstones), else the current time captured once
        before sorting. Records sharing a timestamp keep their insertion
        order; none are dropped.
        """
        now = int(utcnow().timestamp())
        self._entries.sort(key=lambda record: record.effective_timestamp(now), reverse=True)
        logger.debug("Ordered %d records by date", len(self._entries))

    # MARK: - Export

    def build_renderer(
        self,
        format: Union[str, FeedFormat],
        suppress_validation_errors: bool = False
    ) -> AbstractFeedRenderer:
        """
        Select and configure the renderer for ``format``.

        Also records the normalised format as this feed's type.

        Raises:
            InvalidFormatError: format is neither "rss" nor "atom"
        """
        feed_format = FeedFormat.normalize(format)
        self._type = feed_format
        renderer = get_renderer(feed_format)(self, encoding=self.encoding, settings=self._settings)
        if suppress_validation_errors:
            renderer.ignore_exceptions()
        return renderer

    def export(
        self,
        format: Union[str, FeedFormat],
        suppress_validation_errors: bool = False
    ) -> str:
        """
        Render the feed as an RSS 2.0 or Atom 1.0 document.

        Args:
            format: "rss" or "atom" (case-insensitive)
            suppress_validation_errors: Skip invalid entries (and omit invalid
                feed-level elements) instead of aborting

        Returns:
            XML document, declared in the feed's encoding (default UTF-8)

        Raises:
            InvalidFormatError: format is neither "rss" nor "atom"
            ExportValidationError: data failed validation and errors are not
                suppressed
        """
        renderer = self.build_renderer(format, suppress_validation_errors)
        xml = renderer.render().save_xml()
        if renderer.exceptions:
            logger.info(
                "Exported %s feed with %d suppressed validation errors",
                renderer.format.value,
                len(renderer.exceptions)
            )
        return xml

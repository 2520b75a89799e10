from datetime import datetime, timezone

import pytest

from feedwriter import (
    Entry,
    Feed,
    FeedFormat,
    InvalidFormatError,
    MissingRequiredFieldError,
    NotFoundError,
    Tombstone,
)


def _make_feed(**kwargs) -> Feed:
    """Helper to create a feed with the RSS-required channel fields."""
    return Feed(
        title="This is a test feed.",
        description="This is a test description.",
        link="http://www.example.com",
        **kwargs,
    )


def _add_entries(feed: Feed, count: int) -> list[Entry]:
    entries = []
    for i in range(count):
        entry = feed.create_entry()
        entry.title = f"Entry {i}"
        entry.link = f"http://www.example.com/{i}"
        feed.add_entry(entry)
        entries.append(entry)
    return entries


def _dated_entry(feed: Feed, title: str, timestamp=None, created=None) -> Entry:
    entry = feed.create_entry()
    entry.title = title
    entry.date_modified = timestamp
    entry.date_created = created
    feed.add_entry(entry)
    return entry


@pytest.mark.parametrize("count", [0, 1, 5])
def test_count_matches_added_entries(count: int) -> None:
    feed = _make_feed()
    _add_entries(feed, count)

    assert feed.count() == count
    assert len(feed) == count


def test_remove_entry_then_second_removal_fails() -> None:
    feed = _make_feed()
    _add_entries(feed, 3)

    feed.remove_entry(2)
    assert feed.count() == 2

    with pytest.raises(NotFoundError):
        feed.remove_entry(2)


def test_remove_entry_compacts_indices() -> None:
    feed = _make_feed()
    entries = _add_entries(feed, 3)

    feed.remove_entry(0)

    assert feed.get_entry(0) is entries[1]
    assert feed.get_entry(1) is entries[2]


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_get_and_remove_out_of_range_raise_not_found(index: int) -> None:
    feed = _make_feed()
    _add_entries(feed, 3)

    with pytest.raises(NotFoundError) as exc_info:
        feed.get_entry(index)
    assert exc_info.value.index == index

    with pytest.raises(NotFoundError):
        feed.remove_entry(index)
    assert feed.count() == 3


def test_not_found_is_a_lookup_error() -> None:
    with pytest.raises(LookupError):
        _make_feed().get_entry(0)


def test_create_entry_inherits_encoding_and_type() -> None:
    feed = _make_feed(encoding="iso-8859-1", type="ATOM")

    entry = feed.create_entry()
    tombstone = feed.create_tombstone()

    assert entry.encoding == "iso-8859-1"
    assert entry.type == "atom"
    assert tombstone.encoding == "iso-8859-1"
    assert tombstone.type == "atom"
    assert feed.count() == 0


def test_create_entry_without_feed_encoding_leaves_it_unset() -> None:
    entry = _make_feed().create_entry()

    assert entry.encoding is None
    assert entry.type is None


def test_add_entry_rejects_tombstones_and_vice_versa() -> None:
    feed = _make_feed()

    with pytest.raises(TypeError):
        feed.add_entry(feed.create_tombstone())
    with pytest.raises(TypeError):
        feed.add_tombstone(feed.create_entry())


def test_tombstones_share_the_sequence() -> None:
    feed = _make_feed()
    _add_entries(feed, 1)
    tombstone = feed.create_tombstone()
    tombstone.reference = "http://www.example.com/old"
    feed.add_tombstone(tombstone)

    assert feed.count() == 2
    assert isinstance(feed.get_entry(1), Tombstone)


def test_cursor_walks_every_record_then_becomes_invalid() -> None:
    feed = _make_feed()
    entries = _add_entries(feed, 3)

    seen = []
    feed.rewind()
    while feed.valid():
        seen.append(feed.current())
        feed.advance()

    assert seen == entries
    assert feed.key() == 3
    assert not feed.valid()
    with pytest.raises(NotFoundError):
        feed.current()

    feed.rewind()
    assert feed.key() == 0
    assert feed.current() is entries[0]


def test_iteration_yields_records_in_order() -> None:
    feed = _make_feed()
    entries = _add_entries(feed, 3)

    assert list(feed) == entries
    assert list(feed) == entries


def test_order_by_date_sorts_newest_first() -> None:
    feed = _make_feed()
    _dated_entry(feed, "a", 1000)
    _dated_entry(feed, "c", 3000)
    _dated_entry(feed, "b", 2000)

    feed.order_by_date()

    assert [e.title for e in feed] == ["c", "b", "a"]
    assert [int(e.date_modified.timestamp()) for e in feed] == [3000, 2000, 1000]


def test_order_by_date_prefers_modified_over_created() -> None:
    feed = _make_feed()
    _dated_entry(feed, "created-only", created=2500)
    _dated_entry(feed, "modified", timestamp=1000, created=5000)

    feed.order_by_date()

    assert [e.title for e in feed] == ["created-only", "modified"]


def test_order_by_date_keeps_entries_sharing_a_timestamp() -> None:
    feed = _make_feed()
    _dated_entry(feed, "first", 2000)
    _dated_entry(feed, "older", 1000)
    _dated_entry(feed, "second", 2000)

    feed.order_by_date()

    assert feed.count() == 3
    assert [e.title for e in feed] == ["first", "second", "older"]


def test_order_by_date_puts_undated_entries_at_now() -> None:
    feed = _make_feed()
    _dated_entry(feed, "old", 1000)
    _dated_entry(feed, "undated")
    _dated_entry(feed, "future", int(datetime(2999, 1, 1, tzinfo=timezone.utc).timestamp()))

    feed.order_by_date()

    assert [e.title for e in feed] == ["future", "undated", "old"]


def test_order_by_date_uses_tombstone_deletion_time() -> None:
    feed = _make_feed()
    _dated_entry(feed, "old", 1000)
    tombstone = feed.create_tombstone()
    tombstone.reference = "http://www.example.com/gone"
    tombstone.when = 2000
    feed.add_tombstone(tombstone)

    feed.order_by_date()

    assert feed.get_entry(0) is tombstone


@pytest.mark.parametrize("requested, expected", [
    ("rss", "rss"),
    ("RSS", "rss"),
    ("Rss", "rss"),
    ("atom", "atom"),
    (" ATOM ", "atom"),
    (FeedFormat.ATOM, "atom"),
])
def test_export_normalizes_format(requested, expected) -> None:
    feed = _make_feed(date_modified=1234567890)
    entry = feed.create_entry()
    entry.title = "This is a test entry."
    entry.link = "http://www.example.com/1"
    entry.date_modified = 1234567890
    feed.add_entry(entry)

    xml = feed.export(requested)

    assert feed.type == expected
    assert xml.startswith("<?xml")


@pytest.mark.parametrize("requested", ["rdf", "", "rss2", "atom1.0", None, 3])
def test_export_rejects_unknown_formats(requested) -> None:
    with pytest.raises(InvalidFormatError):
        _make_feed().export(requested)


def test_invalid_format_is_never_suppressed() -> None:
    with pytest.raises(InvalidFormatError):
        _make_feed().export("json", suppress_validation_errors=True)


def test_export_fails_fast_on_invalid_entry() -> None:
    feed = _make_feed()
    feed.add_entry(feed.create_entry())

    with pytest.raises(MissingRequiredFieldError):
        feed.export("rss")


def test_export_with_suppression_skips_invalid_entry() -> None:
    feed = _make_feed()
    _add_entries(feed, 1)
    feed.add_entry(feed.create_entry())

    xml = feed.export("rss", suppress_validation_errors=True)

    assert xml.count("<item>") == 1


def test_feed_accepts_metadata_or_fields_not_both() -> None:
    feed = _make_feed()

    with pytest.raises(TypeError):
        Feed(metadata=feed.metadata, title="Other")


def test_unknown_encoding_is_rejected_when_set() -> None:
    with pytest.raises(ValueError):
        _make_feed(encoding="bogus-enc")

    feed = _make_feed()
    with pytest.raises(ValueError):
        feed.encoding = "bogus-enc"
    assert feed.encoding is None

    feed.encoding = "iso-8859-1"
    assert feed.create_entry().encoding == "iso-8859-1"

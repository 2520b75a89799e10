import feedparser
import pytest
from lxml import etree

from feedwriter import (
    Entry,
    Feed,
    InvalidEnclosureError,
    InvalidFieldError,
    MissingRequiredFieldError,
)
from feedwriter.feeds.formats import ATOM_NS, THREAD_NS, TOMBSTONE_NS, XML_NS
from feedwriter.feeds.renderers import AtomFeedRenderer

CHAR_DATA = '<>&\'"áéíóú'


def _atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


def _make_feed(**kwargs) -> tuple[Feed, Entry]:
    """Helper to create a minimal valid Atom feed holding one entry."""
    fields = {
        "title": "This is a test feed.",
        "description": "This is a test description.",
        "link": "http://www.example.com",
        "date_modified": 1234567890,
        "feed_links": {"atom": "http://www.example.com/atom"},
    }
    fields.update(kwargs)
    feed = Feed(**fields)
    entry = feed.create_entry()
    entry.title = "This is a test entry."
    entry.description = "This is a test entry description."
    entry.link = "http://www.example.com/1"
    entry.date_modified = 1234567890
    feed.add_entry(entry)
    return feed, entry


def _root(feed: Feed) -> etree._Element:
    return etree.fromstring(feed.export("atom").encode("utf-8"))


def _entry(feed: Feed) -> etree._Element:
    return _root(feed).find(_atom("entry"))


def test_feed_level_elements() -> None:
    feed, _ = _make_feed(language="en-CA", copyright="Copyright 2026")

    root = _root(feed)

    assert root.tag == _atom("feed")
    assert root.get(f"{{{XML_NS}}}lang") == "en-CA"
    assert root.findtext(_atom("id")) == "http://www.example.com"
    assert root.findtext(_atom("title")) == "This is a test feed."
    assert root.findtext(_atom("subtitle")) == "This is a test description."
    assert root.findtext(_atom("updated")) == "2009-02-13T23:31:30+00:00"
    assert root.findtext(_atom("rights")) == "Copyright 2026"
    assert root.findtext(_atom("generator")) == "feedwriter"
    rels = {link.get("rel"): link.get("href") for link in root.findall(_atom("link"))}
    assert rels == {"alternate": "http://www.example.com", "self": "http://www.example.com/atom"}


def test_feed_without_updated_raises() -> None:
    feed, _ = _make_feed(date_modified=None)

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        feed.export("atom")
    assert exc_info.value.field == "date_modified"


def test_feed_level_errors_are_suppressible() -> None:
    feed, _ = _make_feed(date_modified=None, title=None)

    renderer = AtomFeedRenderer(feed).ignore_exceptions().render()
    root = renderer.root_element

    assert root.find(_atom("updated")) is None
    assert root.find(_atom("title")) is None
    assert root.find(_atom("entry")) is not None
    assert sorted(e.field for e in renderer.exceptions) == ["date_modified", "title"]


def test_entry_elements() -> None:
    feed, entry = _make_feed()
    entry.date_created = 1234567000
    entry.content = CHAR_DATA

    element = _entry(feed)

    assert element.findtext(_atom("id")) == "http://www.example.com/1"
    assert element.findtext(_atom("title")) == "This is a test entry."
    assert element.findtext(_atom("summary")) == "This is a test entry description."
    assert element.findtext(_atom("updated")) == "2009-02-13T23:31:30+00:00"
    assert element.findtext(_atom("published")) == "2009-02-13T23:16:40+00:00"
    assert element.findtext(_atom("content")) == CHAR_DATA
    assert element.find(_atom("link")).get("href") == "http://www.example.com/1"


def test_title_char_data_round_trips() -> None:
    feed, entry = _make_feed()
    entry.title = CHAR_DATA

    assert _entry(feed).findtext(_atom("title")) == CHAR_DATA


def test_title_is_required() -> None:
    feed, entry = _make_feed()
    entry.title = None

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        feed.export("atom")
    assert exc_info.value.field == "title"


def test_id_or_link_is_required() -> None:
    feed, entry = _make_feed()
    entry.link = None
    entry.content = "Body"

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        feed.export("atom")
    assert exc_info.value.field == "id"


def test_entry_date_is_required() -> None:
    feed, entry = _make_feed()
    entry.date_modified = None

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        feed.export("atom")
    assert exc_info.value.field == "date_modified"


def test_updated_falls_back_to_date_created() -> None:
    feed, entry = _make_feed()
    entry.date_modified = None
    entry.date_created = 1234567000

    element = _entry(feed)

    assert element.findtext(_atom("updated")) == element.findtext(_atom("published"))


def test_content_or_link_is_required() -> None:
    feed, entry = _make_feed()
    entry.id = "urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6"
    entry.link = None

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        feed.export("atom")
    assert exc_info.value.field == "content"


def test_authors_keep_email_and_uri() -> None:
    feed, entry = _make_feed()
    entry.add_author({"name": "Jane", "email": "jane@example.com", "uri": "http://www.example.com/jane"})

    author = _entry(feed).find(_atom("author"))

    assert author.findtext(_atom("name")) == "Jane"
    assert author.findtext(_atom("email")) == "jane@example.com"
    assert author.findtext(_atom("uri")) == "http://www.example.com/jane"


def test_category_label_defaults_to_term() -> None:
    feed, entry = _make_feed()
    entry.add_categories([
        {"term": "cat_dog", "label": "Cats & Dogs", "scheme": "http://example.com/schema1"},
        {"term": "cat_dog2"},
    ])

    categories = _entry(feed).findall(_atom("category"))

    assert [(c.get("term"), c.get("label"), c.get("scheme")) for c in categories] == [
        ("cat_dog", "Cats & Dogs", "http://example.com/schema1"),
        ("cat_dog2", "cat_dog2", None),
    ]


def test_enclosure_rendered_as_link() -> None:
    feed, entry = _make_feed()
    entry.enclosure = {"type": "audio/mpeg", "length": 1337, "uri": "http://example.com/audio.mp3"}

    links = _entry(feed).findall(_atom("link"))
    enclosure = [link for link in links if link.get("rel") == "enclosure"][0]

    assert enclosure.get("href") == "http://example.com/audio.mp3"
    assert enclosure.get("length") == "1337"
    assert enclosure.get("type") == "audio/mpeg"


def test_invalid_enclosure_raises() -> None:
    feed, entry = _make_feed()
    entry.enclosure = {"uri": "http://example.com/audio.mp3", "length": "1337"}

    with pytest.raises(InvalidEnclosureError):
        feed.export("atom")


def test_comment_links_render_as_replies() -> None:
    feed, entry = _make_feed()
    entry.comment_link = "http://www.example.com/id/1"
    entry.comment_count = 22
    entry.add_comment_feed_link({"uri": "http://www.example.com/atom/id/1", "type": "atom"})
    entry.add_comment_feed_link({"uri": "http://www.example.com/rss/id/1", "type": "rss"})

    element = _entry(feed)
    replies = [link for link in element.findall(_atom("link")) if link.get("rel") == "replies"]

    assert [(link.get("type"), link.get("href")) for link in replies] == [
        ("text/html", "http://www.example.com/id/1"),
        ("application/atom+xml", "http://www.example.com/atom/id/1"),
        ("application/rss+xml", "http://www.example.com/rss/id/1"),
    ]
    assert all(link.get(f"{{{THREAD_NS}}}count") == "22" for link in replies)
    assert element.findtext(f"{{{THREAD_NS}}}total") == "22"


def test_tombstone_rendered() -> None:
    feed, _ = _make_feed()
    tombstone = feed.create_tombstone()
    tombstone.reference = "http://www.example.com/old"
    tombstone.when = 1234567890
    tombstone.link = "http://www.example.com/old"
    feed.add_tombstone(tombstone)

    deleted = _root(feed).find(f"{{{TOMBSTONE_NS}}}deleted-entry")

    assert deleted.get("ref") == "http://www.example.com/old"
    assert deleted.get("when") == "2009-02-13T23:31:30+00:00"
    assert deleted.find(_atom("link")).get("href") == "http://www.example.com/old"


def test_suppression_skips_invalid_entry() -> None:
    feed, _ = _make_feed()
    undated = feed.create_entry()
    undated.title = "No date"
    undated.link = "http://www.example.com/2"
    feed.add_entry(undated)

    xml = feed.export("atom", suppress_validation_errors=True)
    root = etree.fromstring(xml.encode("utf-8"))

    assert [e.findtext(_atom("title")) for e in root.findall(_atom("entry"))] == ["This is a test entry."]


def test_parses_with_feedparser() -> None:
    feed, _ = _make_feed()

    parsed = feedparser.parse(feed.export("atom").encode("utf-8"))

    assert parsed.bozo == 0
    assert parsed.version == "atom10"
    assert parsed.feed.title == "This is a test feed."
    assert parsed.entries[0].title == "This is a test entry."
    assert parsed.entries[0].id == "http://www.example.com/1"


@pytest.mark.parametrize("fields, field", [
    ({"language": "en\x01"}, "language"),
    ({"generator": {"name": "Site", "uri": "http://x/\x02"}}, "generator"),
    ({"link": "http://www.example.com/\x03", "id": "urn:feed:1"}, "link"),
    ({"feed_links": {"atom": "http://x/atom\x04"}}, "feed_links.atom"),
    ({"authors": [{"name": "Jane", "email": "jane\x05@example.com"}]}, "author"),
    ({"categories": [{"term": "news", "label": "News\x06"}]}, "category"),
])
def test_unwritable_feed_values_are_suppressible(fields: dict, field: str) -> None:
    feed, _ = _make_feed(**fields)

    with pytest.raises(InvalidFieldError):
        feed.export("atom")

    xml = feed.export("atom", suppress_validation_errors=True)
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.find(_atom("entry")) is not None

    renderer = AtomFeedRenderer(feed).ignore_exceptions().render()
    assert [e.field for e in renderer.exceptions] == [field]


def test_tombstone_with_unwritable_reference_is_skipped() -> None:
    feed, _ = _make_feed()
    tombstone = feed.create_tombstone()
    tombstone.reference = "http://www.example.com/\x07"
    tombstone.when = 1234567890
    feed.add_tombstone(tombstone)

    with pytest.raises(InvalidFieldError):
        feed.export("atom")

    xml = feed.export("atom", suppress_validation_errors=True)
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.find(f"{{{TOMBSTONE_NS}}}deleted-entry") is None
"""
Atom 1.0 Renderers
==================
Feed and entry rendering for Atom 1.0 (RFC 4287) documents, with comment
threading (RFC 4685) and tombstones (RFC 6721).

Responsibility: Validate and serialise feeds and entries as Atom 1.0
"""

from typing import Optional

from lxml import etree

from ...exceptions import MissingRequiredFieldError
from ...models import Author, Entry
from ...utils.dates import format_rfc3339
from ..formats import ATOM_NS, THREAD_NS, TOMBSTONE_NS, XML_NS, FeedFormat
from .base import AbstractFeedRenderer, AbstractRenderer, check_char_data

ATOM_NSMAP = {
    None: ATOM_NS,
    "thr": THREAD_NS,
    "at": TOMBSTONE_NS,
}


def _atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


def _add_person(parent: etree._Element, tag: str, author: Author) -> None:
    person = etree.SubElement(parent, _atom(tag))
    etree.SubElement(person, _atom("name")).text = author.name
    if author.email:
        etree.SubElement(person, _atom("email")).text = author.email
    if author.uri:
        etree.SubElement(person, _atom("uri")).text = author.uri


def _add_category(parent: etree._Element, term: str, label: Optional[str], scheme: Optional[str]) -> None:
    category = etree.SubElement(parent, _atom("category"), term=term)
    if label:
        category.set("label", label)
    if scheme:
        category.set("scheme", scheme)


class AtomEntryRenderer(AbstractRenderer):
    """Renders one entry as an Atom ``<entry>``"""

    def render(self, parent: etree._Element) -> etree._Element:
        """
        Validate the entry and append its ``<entry>`` to ``parent``.

        Raises:
            MissingRequiredFieldError: missing title, identifier, date,
                content-or-link, author name or category term
            InvalidEnclosureError: incomplete enclosure or bad length
            InvalidFieldError: text XML cannot represent
        """
        entry: Entry = self._container

        if not entry.title and not entry.description:
            raise MissingRequiredFieldError(
                "title",
                "Atom 1.0 entry elements MUST contain exactly one atom:title element "
                "and no description was set either"
            )
        if not entry.title:
            raise MissingRequiredFieldError(
                "title",
                "Atom 1.0 entry elements MUST contain exactly one atom:title element "
                "but a title has not been set"
            )
        identifier = entry.id or entry.link
        if not identifier:
            raise MissingRequiredFieldError(
                "id",
                "Atom 1.0 entry elements MUST contain exactly one atom:id element, "
                "or as an alternative, we can use the same value as atom:link however "
                "neither a suitable link nor an id have been set"
            )
        updated = entry.date_modified or entry.date_created
        if updated is None:
            raise MissingRequiredFieldError(
                "date_modified",
                "Atom 1.0 entry elements MUST contain exactly one atom:updated element "
                "but a modification date has not been set"
            )
        enclosure_length = None
        if entry.enclosure is not None:
            enclosure_length = entry.enclosure.validate_for_render()
        for category in entry.categories:
            if not category.term:
                raise MissingRequiredFieldError(
                    "category.term",
                    "Each category must be an object that contains at least a term"
                )
        for author in entry.authors:
            if not author.name:
                raise MissingRequiredFieldError(
                    "author.name",
                    "Each author must contain at least a name"
                )
        self._check_char_data(identifier)
        if not entry.content and not entry.link:
            raise MissingRequiredFieldError(
                "content",
                "Atom 1.0 entry elements MUST contain an atom:content element "
                "if the entry has no alternate link"
            )

        element = etree.SubElement(parent, _atom("entry"))
        etree.SubElement(element, _atom("id")).text = identifier
        etree.SubElement(element, _atom("title"), type="text").text = entry.title
        if entry.description:
            etree.SubElement(element, _atom("summary"), type="html").text = entry.description
        etree.SubElement(element, _atom("updated")).text = format_rfc3339(updated)
        if entry.date_created is not None:
            etree.SubElement(element, _atom("published")).text = format_rfc3339(entry.date_created)
        if entry.link:
            etree.SubElement(element, _atom("link"), rel="alternate", type="text/html", href=entry.link)
        for author in entry.authors:
            _add_person(element, "author", author)
        if entry.enclosure is not None:
            etree.SubElement(
                element,
                _atom("link"),
                rel="enclosure",
                type=entry.enclosure.type,
                length=str(enclosure_length),
                href=entry.enclosure.uri
            )
        for category in entry.categories:
            _add_category(element, category.term, category.resolved_label, category.scheme)
        self._set_comments(element)
        if entry.content:
            etree.SubElement(element, _atom("content"), type="html").text = entry.content
        return element

    def _check_char_data(self, identifier: str) -> None:
        entry: Entry = self._container
        check_char_data("title", entry.title)
        check_char_data("description", entry.description)
        check_char_data("content", entry.content)
        check_char_data("id", identifier)
        check_char_data("link", entry.link)
        check_char_data("comment_link", entry.comment_link)
        for author in entry.authors:
            check_char_data("author.name", author.name)
            check_char_data("author.email", author.email)
            check_char_data("author.uri", author.uri)
        for category in entry.categories:
            check_char_data("category.term", category.term)
            check_char_data("category.label", category.label)
            check_char_data("category.scheme", category.scheme)
        if entry.enclosure is not None:
            check_char_data("enclosure.type", entry.enclosure.type)
            check_char_data("enclosure.uri", entry.enclosure.uri)
        for link in entry.comment_feed_links:
            check_char_data("comment_feed_link.uri", link.uri)
            check_char_data("comment_feed_link.type", link.type)

    def _set_comments(self, element: etree._Element) -> None:
        entry: Entry = self._container
        if entry.comment_link:
            replies = etree.SubElement(
                element,
                _atom("link"),
                rel="replies",
                type="text/html",
                href=entry.comment_link
            )
            if entry.comment_count is not None:
                replies.set(f"{{{THREAD_NS}}}count", str(entry.comment_count))
        for link in entry.comment_feed_links:
            replies = etree.SubElement(
                element,
                _atom("link"),
                rel="replies",
                type=f"application/{link.type}+xml",
                href=link.uri
            )
            if entry.comment_count is not None:
                replies.set(f"{{{THREAD_NS}}}count", str(entry.comment_count))
        if entry.comment_count is not None:
            etree.SubElement(element, f"{{{THREAD_NS}}}total").text = str(entry.comment_count)


class AtomFeedRenderer(AbstractFeedRenderer):
    """
    Renders a feed as an Atom 1.0 document.

    Example:
        renderer = AtomFeedRenderer(feed)
        xml = renderer.render().save_xml()
    """

    format = FeedFormat.ATOM
    entry_renderer_class = AtomEntryRenderer
    nsmap = ATOM_NSMAP

    def _create_root(self):
        feed = etree.Element(_atom("feed"), nsmap=self.nsmap)
        language = self._container.metadata.language
        if language and self._writable("language", language):
            feed.set(f"{{{XML_NS}}}lang", language)
        return feed, feed

    def _render_feed_elements(self, feed: etree._Element) -> None:
        metadata = self._container.metadata

        identifier = metadata.id or metadata.link
        if not identifier:
            self._handle_error(MissingRequiredFieldError(
                "id",
                "Atom 1.0 feed elements MUST contain exactly one atom:id element, "
                "or as an alternative, we can use the same value as atom:link however "
                "neither a suitable link nor an id have been set"
            ))
        else:
            self._text(feed, "id", "id", identifier)

        if not metadata.title:
            self._handle_error(MissingRequiredFieldError(
                "title",
                "Atom 1.0 feed elements MUST contain exactly one atom:title element "
                "but a title has not been set"
            ))
        else:
            self._text(feed, "title", "title", metadata.title, type="text")

        if metadata.description:
            self._text(feed, "subtitle", "description", metadata.description, type="text")

        if metadata.date_modified is None:
            self._handle_error(MissingRequiredFieldError(
                "date_modified",
                "Atom 1.0 feed elements MUST contain exactly one atom:updated element "
                "but a modification date has not been set"
            ))
        else:
            etree.SubElement(feed, _atom("updated")).text = format_rfc3339(metadata.date_modified)

        name, version, uri = self._generator()
        if self._writable("generator", name, version, uri):
            generator = etree.SubElement(feed, _atom("generator"))
            if version:
                generator.set("version", version)
            if uri:
                generator.set("uri", uri)
            generator.text = name

        if metadata.link and self._writable("link", metadata.link):
            etree.SubElement(feed, _atom("link"), rel="alternate", type="text/html", href=metadata.link)
        self_link = metadata.feed_links.get(FeedFormat.ATOM.value)
        if self_link and self._writable("feed_links.atom", self_link):
            etree.SubElement(feed, _atom("link"), rel="self", type="application/atom+xml", href=self_link)

        for author in metadata.authors:
            if not author.name:
                self._handle_error(MissingRequiredFieldError("author.name", "Each author must contain at least a name"))
                continue
            if self._writable("author", author.name, author.email, author.uri):
                _add_person(feed, "author", author)

        for category in metadata.categories:
            if not category.term:
                self._handle_error(MissingRequiredFieldError(
                    "category.term", "Each category must be an object that contains at least a term"
                ))
                continue
            if self._writable("category", category.term, category.label, category.scheme):
                _add_category(feed, category.term, category.resolved_label, category.scheme)

        if metadata.copyright:
            self._text(feed, "rights", "copyright", metadata.copyright)
        if metadata.image is not None and metadata.image.uri:
            self._text(feed, "logo", "image.uri", metadata.image.uri)

    def _text(self, parent: etree._Element, tag: str, field: str, value: str, **attrs) -> None:
        if self._writable(field, value):
            etree.SubElement(parent, _atom(tag), **attrs).text = value

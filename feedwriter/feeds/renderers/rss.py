"""
RSS 2.0 Renderers
=================
Channel and item rendering for RSS 2.0 documents.

Elements RSS 2.0 has no slot for are carried by the usual extension
modules: ``content:encoded`` for full content, ``dc:creator`` for
authors, ``slash:comments`` / ``wfw:commentRss`` for comment metadata and
``atom:link rel="self"`` for the feed's own URL.

Responsibility: Validate and serialise feeds and entries as RSS 2.0
"""

import logging
from typing import Optional

from lxml import etree

from ...exceptions import InvalidFieldError, MissingRequiredFieldError
from ...models import Entry
from ...utils.dates import format_rfc822, utcnow
from ...utils.uri import is_web_uri
from ..formats import (
    ATOM_NS,
    CONTENT_NS,
    DC_NS,
    SLASH_NS,
    TOMBSTONE_NS,
    WFW_NS,
    FeedFormat,
)
from .base import AbstractFeedRenderer, AbstractRenderer, check_char_data

logger = logging.getLogger(__name__)

RSS_NSMAP = {
    "content": CONTENT_NS,
    "dc": DC_NS,
    "slash": SLASH_NS,
    "wfw": WFW_NS,
    "atom": ATOM_NS,
    "at": TOMBSTONE_NS,
}

# RSS 2.0 image size limits (pixels)
MAX_IMAGE_WIDTH = 144
MAX_IMAGE_HEIGHT = 400


def _write_markup(element: etree._Element, value: str) -> None:
    """Wrap markup in CDATA unless the text cannot be carried that way"""
    if "]]>" in value or "\r" in value:
        element.text = value
    else:
        element.text = etree.CDATA(value)


class RssEntryRenderer(AbstractRenderer):
    """
    Renders one entry as an RSS ``<item>``.

    All checks run before any element is created, so a rejected entry
    leaves nothing behind in the document.
    """

    def render(self, parent: etree._Element) -> etree._Element:
        """
        Validate the entry and append its ``<item>`` to ``parent``.

        Raises:
            MissingRequiredFieldError: no title and no description, or an
                author/category without its name/term
            InvalidEnclosureError: incomplete enclosure or bad length
            InvalidFieldError: text XML cannot represent
        """
        entry: Entry = self._container

        if not entry.title and not entry.description:
            raise MissingRequiredFieldError(
                "title",
                "RSS 2.0 entry elements SHOULD contain exactly one title element "
                "but a title has not been set. In addition, there is no description "
                "as required in the absence of a title."
            )
        identifier = entry.id or entry.link
        enclosure_length = self._validate_enclosure()
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

        item = etree.SubElement(parent, "item")
        self._set_title(item)
        self._set_description(item)
        self._set_content(item)
        self._set_link(item)
        self._set_id(item, identifier)
        self._set_date(item)
        self._set_authors(item)
        self._set_enclosure(item, enclosure_length)
        self._set_categories(item)
        self._set_comment_link(item)
        self._set_comment_count(item)
        self._set_comment_feed_links(item)
        return item

    # MARK: - Validation

    def _validate_enclosure(self) -> Optional[int]:
        if self._container.enclosure is None:
            return None
        return self._container.enclosure.validate_for_render()

    def _check_char_data(self, identifier: Optional[str]) -> None:
        entry: Entry = self._container
        check_char_data("title", entry.title)
        check_char_data("description", entry.description)
        check_char_data("content", entry.content)
        check_char_data("id", identifier)
        check_char_data("link", entry.link)
        check_char_data("comment_link", entry.comment_link)
        for author in entry.authors:
            check_char_data("author.name", author.name)
        for category in entry.categories:
            check_char_data("category.term", category.term)
            check_char_data("category.scheme", category.scheme)
        if entry.enclosure is not None:
            check_char_data("enclosure.type", entry.enclosure.type)
            check_char_data("enclosure.uri", entry.enclosure.uri)
        for link in entry.comment_feed_links:
            check_char_data("comment_feed_link.uri", link.uri)
            check_char_data("comment_feed_link.type", link.type)

    # MARK: - Elements

    def _set_title(self, item: etree._Element) -> None:
        if self._container.title:
            etree.SubElement(item, "title").text = self._container.title

    def _set_description(self, item: etree._Element) -> None:
        if self._container.description:
            etree.SubElement(item, "description").text = self._container.description

    def _set_content(self, item: etree._Element) -> None:
        if self._container.content:
            _write_markup(etree.SubElement(item, f"{{{CONTENT_NS}}}encoded"), self._container.content)

    def _set_link(self, item: etree._Element) -> None:
        if self._container.link:
            etree.SubElement(item, "link").text = self._container.link

    def _set_id(self, item: etree._Element, identifier: Optional[str]) -> None:
        if not identifier:
            return
        guid = etree.SubElement(item, "guid")
        guid.set("isPermaLink", "true" if is_web_uri(identifier) else "false")
        guid.text = identifier

    def _set_date(self, item: etree._Element) -> None:
        # RSS items carry a single date
        date = self._container.date_modified or self._container.date_created
        if date is not None:
            etree.SubElement(item, "pubDate").text = format_rfc822(date)

    def _set_authors(self, item: etree._Element) -> None:
        for author in self._container.authors:
            etree.SubElement(item, f"{{{DC_NS}}}creator").text = author.name

    def _set_enclosure(self, item: etree._Element, length: Optional[int]) -> None:
        enclosure = self._container.enclosure
        if enclosure is None:
            return
        etree.SubElement(
            item,
            "enclosure",
            url=enclosure.uri,
            length=str(length),
            type=enclosure.type
        )

    def _set_categories(self, item: etree._Element) -> None:
        for category in self._container.categories:
            element = etree.SubElement(item, "category")
            if category.scheme:
                element.set("domain", category.scheme)
            element.text = category.term

    def _set_comment_link(self, item: etree._Element) -> None:
        if self._container.comment_link:
            etree.SubElement(item, "comments").text = self._container.comment_link

    def _set_comment_count(self, item: etree._Element) -> None:
        if self._container.comment_count is not None:
            etree.SubElement(item, f"{{{SLASH_NS}}}comments").text = str(self._container.comment_count)

    def _set_comment_feed_links(self, item: etree._Element) -> None:
        for link in self._container.comment_feed_links:
            if link.type != FeedFormat.RSS.value:
                logger.debug("RSS cannot link a %s comment feed, dropping %s", link.type, link.uri)
                continue
            etree.SubElement(item, f"{{{WFW_NS}}}commentRss").text = link.uri


class RssFeedRenderer(AbstractFeedRenderer):
    """
    Renders a feed as an RSS 2.0 document.

    Example:
        renderer = RssFeedRenderer(feed)
        xml = renderer.render().save_xml()
    """

    format = FeedFormat.RSS
    entry_renderer_class = RssEntryRenderer
    nsmap = RSS_NSMAP

    def _create_root(self):
        rss = etree.Element("rss", nsmap=self.nsmap)
        rss.set("version", "2.0")
        channel = etree.SubElement(rss, "channel")
        return rss, channel

    def _render_feed_elements(self, channel: etree._Element) -> None:
        self._set_title(channel)
        self._set_description(channel)
        self._set_link(channel)
        self._set_language(channel)
        self._set_generator(channel)
        self._set_copyright(channel)
        self._set_date_created(channel)
        self._set_last_build_date(channel)
        self._set_ttl(channel)
        self._set_authors(channel)
        self._set_categories(channel)
        self._set_image(channel)
        self._set_self_link(channel)

    @property
    def _metadata(self):
        return self._container.metadata

    def _required_text(self, channel: etree._Element, tag: str, value: Optional[str], message: str) -> None:
        if not value:
            self._handle_error(MissingRequiredFieldError(tag, message))
            return
        if self._writable(tag, value):
            etree.SubElement(channel, tag).text = value

    def _set_title(self, channel: etree._Element) -> None:
        self._required_text(
            channel, "title", self._metadata.title,
            "RSS 2.0 feed elements MUST contain exactly one title element but a title has not been set"
        )

    def _set_description(self, channel: etree._Element) -> None:
        self._required_text(
            channel, "description", self._metadata.description,
            "RSS 2.0 feed elements MUST contain exactly one description element but one has not been set"
        )

    def _set_link(self, channel: etree._Element) -> None:
        self._required_text(
            channel, "link", self._metadata.link,
            "RSS 2.0 feed elements MUST contain exactly one link element but one has not been set"
        )

    def _set_language(self, channel: etree._Element) -> None:
        language = self._metadata.language
        if language and self._writable("language", language):
            etree.SubElement(channel, "language").text = language

    def _set_generator(self, channel: etree._Element) -> None:
        name, version, uri = self._generator()
        if not self._writable("generator", name, version, uri):
            return
        text = name
        if version:
            text += f" {version}"
        if uri:
            text += f" ({uri})"
        etree.SubElement(channel, "generator").text = text

    def _set_copyright(self, channel: etree._Element) -> None:
        copyright = self._metadata.copyright
        if copyright and self._writable("copyright", copyright):
            etree.SubElement(channel, "copyright").text = copyright

    def _set_date_created(self, channel: etree._Element) -> None:
        if self._metadata.date_created is not None:
            etree.SubElement(channel, "pubDate").text = format_rfc822(self._metadata.date_created)

    def _set_last_build_date(self, channel: etree._Element) -> None:
        build_date = self._metadata.last_build_date or utcnow()
        etree.SubElement(channel, "lastBuildDate").text = format_rfc822(build_date)

    def _set_ttl(self, channel: etree._Element) -> None:
        if self._metadata.ttl is not None:
            etree.SubElement(channel, "ttl").text = str(self._metadata.ttl)

    def _set_authors(self, channel: etree._Element) -> None:
        for author in self._metadata.authors:
            if not author.name:
                self._handle_error(MissingRequiredFieldError("author.name", "Each author must contain at least a name"))
                continue
            if self._writable("author.name", author.name):
                etree.SubElement(channel, f"{{{DC_NS}}}creator").text = author.name

    def _set_categories(self, channel: etree._Element) -> None:
        for category in self._metadata.categories:
            if not category.term:
                self._handle_error(MissingRequiredFieldError(
                    "category.term", "Each category must be an object that contains at least a term"
                ))
                continue
            if not self._writable("category", category.term, category.scheme):
                continue
            element = etree.SubElement(channel, "category")
            if category.scheme:
                element.set("domain", category.scheme)
            element.text = category.term

    def _set_image(self, channel: etree._Element) -> None:
        image = self._metadata.image
        if image is None:
            return
        for field in ("uri", "link", "title"):
            if not getattr(image, field):
                self._handle_error(MissingRequiredFieldError(
                    f"image.{field}",
                    f"RSS 2.0 feed images must include a {field}"
                ))
                return
        for field, limit in (("width", MAX_IMAGE_WIDTH), ("height", MAX_IMAGE_HEIGHT)):
            value = getattr(image, field)
            if value is not None and not 0 < value <= limit:
                self._handle_error(InvalidFieldError(
                    f"image.{field}",
                    f"RSS 2.0 image {field} must be a positive integer no greater than {limit}, got {value}"
                ))
                return
        if not self._writable("image", image.uri, image.link, image.title, image.description):
            return

        element = etree.SubElement(channel, "image")
        etree.SubElement(element, "url").text = image.uri
        etree.SubElement(element, "title").text = image.title
        etree.SubElement(element, "link").text = image.link
        if image.width is not None:
            etree.SubElement(element, "width").text = str(image.width)
        if image.height is not None:
            etree.SubElement(element, "height").text = str(image.height)
        if image.description:
            etree.SubElement(element, "description").text = image.description

    def _set_self_link(self, channel: etree._Element) -> None:
        uri = self._metadata.feed_links.get(FeedFormat.RSS.value)
        if uri and self._writable("feed_links.rss", uri):
            etree.SubElement(
                channel,
                f"{{{ATOM_NS}}}link",
                href=uri,
                rel="self",
                type="application/rss+xml"
            )

"""
Renderer Infrastructure
=======================
Base classes shared by the RSS and Atom renderers.

A feed renderer builds an lxml document from a feed, delegating each
entry to an entry renderer and each tombstone to the deleted-entry
renderer. Validation failures either abort the render or, when
``ignore_exceptions()`` was called, are collected in ``exceptions`` while
the offending element is left out.

Responsibility: Document building, encoding and error-suppression plumbing
"""

import logging
import re
from typing import Dict, List, Optional

from lxml import etree

from ...config import WriterSettings, settings as default_settings
from ...exceptions import ExportValidationError, InvalidFieldError, MissingRequiredFieldError
from ...models import Tombstone
from ...utils.dates import format_rfc3339
from ..formats import ATOM_NS, TOMBSTONE_NS, FeedFormat

logger = logging.getLogger(__name__)

# Characters XML 1.0 cannot carry, even escaped
_ILLEGAL_XML_CHARS = re.compile(
    r"[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def check_char_data(field: str, value: Optional[str]) -> None:
    """
    Make sure ``value`` survives a serialise/parse round trip unchanged.

    Raises:
        InvalidFieldError: value contains characters XML 1.0 forbids
    """
    if value is None:
        return
    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise InvalidFieldError(
            field,
            f"{field} contains a character XML cannot represent: {match.group()!r}"
        )


class AbstractRenderer:
    """
    State common to feed and entry renderers.

    Args:
        container: Feed, Entry or Tombstone being rendered
        encoding: Document encoding; falls back to the container's own
            encoding, then to the configured default
        settings: Renderer defaults (global settings when omitted)
    """

    def __init__(
        self,
        container,
        encoding: Optional[str] = None,
        settings: Optional[WriterSettings] = None
    ):
        self._container = container
        self._settings = settings or default_settings
        self._encoding = (
            encoding
            or getattr(container, "encoding", None)
            or self._settings.default_encoding
        )
        self._ignore_exceptions = False
        self.exceptions: List[ExportValidationError] = []

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def data_container(self):
        return self._container

    def ignore_exceptions(self, enabled: bool = True) -> "AbstractRenderer":
        """Collect validation errors instead of raising them"""
        self._ignore_exceptions = enabled
        return self

    @property
    def ignoring_exceptions(self) -> bool:
        return self._ignore_exceptions

    def _handle_error(self, error: ExportValidationError) -> None:
        """Raise ``error``, or record it when exceptions are being ignored"""
        if not self._ignore_exceptions:
            raise error
        logger.warning("Skipping invalid element: %s", error)
        self.exceptions.append(error)

    def _writable(self, field: str, *values: Optional[str]) -> bool:
        """
        Check ``values`` can be written as XML text or attributes.

        Returns:
            False when a value was rejected (and the error recorded), in
            which case the element should be left out
        """
        try:
            for value in values:
                check_char_data(field, value)
        except InvalidFieldError as exc:
            self._handle_error(exc)
            return False
        return True


class DeletedEntryRenderer(AbstractRenderer):
    """
    Renders a tombstone as an RFC 6721 ``at:deleted-entry`` element.

    The same element is used in RSS and Atom documents; both root
    elements declare the ``at`` and ``atom`` prefixes.
    """

    def render(self, parent: etree._Element) -> etree._Element:
        tombstone: Tombstone = self._container

        if not tombstone.reference:
            raise MissingRequiredFieldError(
                "reference",
                "Deleted entry elements MUST contain a ref attribute"
            )
        if tombstone.when is None:
            raise MissingRequiredFieldError(
                "when",
                "Deleted entry elements MUST contain a when attribute"
            )
        if tombstone.by is not None and not tombstone.by.name:
            raise MissingRequiredFieldError("by.name")
        check_char_data("reference", tombstone.reference)
        check_char_data("comment", tombstone.comment)
        check_char_data("link", tombstone.link)
        if tombstone.by is not None:
            check_char_data("by.name", tombstone.by.name)
            check_char_data("by.email", tombstone.by.email)
            check_char_data("by.uri", tombstone.by.uri)

        deleted = etree.SubElement(parent, f"{{{TOMBSTONE_NS}}}deleted-entry")
        deleted.set("ref", tombstone.reference)
        deleted.set("when", format_rfc3339(tombstone.when))

        if tombstone.by is not None:
            by = etree.SubElement(deleted, f"{{{TOMBSTONE_NS}}}by")
            etree.SubElement(by, f"{{{ATOM_NS}}}name").text = tombstone.by.name
            if tombstone.by.email:
                etree.SubElement(by, f"{{{ATOM_NS}}}email").text = tombstone.by.email
            if tombstone.by.uri:
                etree.SubElement(by, f"{{{ATOM_NS}}}uri").text = tombstone.by.uri

        if tombstone.comment:
            etree.SubElement(deleted, f"{{{TOMBSTONE_NS}}}comment").text = tombstone.comment

        if tombstone.link:
            etree.SubElement(deleted, f"{{{ATOM_NS}}}link", href=tombstone.link)

        return deleted


class AbstractFeedRenderer(AbstractRenderer):
    """
    Base class for whole-document renderers.

    Subclasses set ``format``, ``entry_renderer_class`` and ``nsmap`` and
    implement ``_create_root`` / ``_render_feed_elements``.
    """

    format: FeedFormat
    entry_renderer_class = None
    deleted_renderer_class = DeletedEntryRenderer
    nsmap: Dict[Optional[str], str] = {}

    def __init__(self, container, encoding: Optional[str] = None, settings: Optional[WriterSettings] = None):
        super().__init__(container, encoding=encoding, settings=settings)
        self._root: Optional[etree._Element] = None

    @property
    def root_element(self) -> Optional[etree._Element]:
        return self._root

    def render(self) -> "AbstractFeedRenderer":
        """
        Build the document.

        Returns:
            self, so that ``render().save_xml()`` reads naturally
        """
        logger.debug(
            "Rendering %s document (%d records, encoding=%s)",
            self.format.value,
            len(self._container),
            self._encoding
        )
        self.exceptions = []
        self._root, entry_parent = self._create_root()
        self._render_feed_elements(entry_parent)
        self._render_entries(entry_parent)
        return self

    def save_xml(self) -> str:
        """Serialise the rendered document with an XML declaration"""
        if self._root is None:
            self.render()
        etree.cleanup_namespaces(self._root)
        payload = etree.tostring(
            self._root,
            xml_declaration=True,
            encoding=self._encoding,
            pretty_print=self._settings.pretty_print
        )
        return payload.decode(self._encoding)

    def _render_entries(self, parent: etree._Element) -> None:
        for record in self._container:
            if isinstance(record, Tombstone):
                renderer = self.deleted_renderer_class(record, encoding=self._encoding, settings=self._settings)
            else:
                renderer = self.entry_renderer_class(record, encoding=self._encoding, settings=self._settings)
            try:
                renderer.render(parent)
            except ExportValidationError as exc:
                self._handle_error(exc)

    def _create_root(self):
        raise NotImplementedError

    def _render_feed_elements(self, parent: etree._Element) -> None:
        raise NotImplementedError

    # MARK: - Helpers shared by both formats

    def _generator(self):
        """Feed generator, or the configured default"""
        generator = self._container.metadata.generator
        if generator is not None:
            return generator.name, generator.version, generator.uri
        return (
            self._settings.generator_name,
            self._settings.generator_version,
            self._settings.generator_uri
        )

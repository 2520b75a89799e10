"""
Renderers Module
================
Per-format document renderers and the table that maps a format tag to
its feed renderer.

Exports:
    - AbstractRenderer / AbstractFeedRenderer: renderer base classes
    - RssFeedRenderer / RssEntryRenderer: RSS 2.0
    - AtomFeedRenderer / AtomEntryRenderer: Atom 1.0
    - DeletedEntryRenderer: tombstones (both formats)
    - register_renderer / get_renderer: format registry
"""

import logging
from typing import Dict, Type

from ..formats import FeedFormat
from .base import AbstractFeedRenderer, AbstractRenderer, DeletedEntryRenderer
from .rss import RssEntryRenderer, RssFeedRenderer
from .atom import AtomEntryRenderer, AtomFeedRenderer

logger = logging.getLogger(__name__)

_RENDERERS: Dict[FeedFormat, Type[AbstractFeedRenderer]] = {
    FeedFormat.RSS: RssFeedRenderer,
    FeedFormat.ATOM: AtomFeedRenderer,
}


def register_renderer(format: FeedFormat, renderer_class: Type[AbstractFeedRenderer]) -> None:
    """
    Install the feed renderer used for ``format``.

    Replaces any renderer previously registered for the same format.
    """
    format = FeedFormat.normalize(format)
    if not issubclass(renderer_class, AbstractFeedRenderer):
        raise TypeError(f"{renderer_class!r} is not an AbstractFeedRenderer subclass")
    logger.debug("Registering %s renderer: %s", format.value, renderer_class.__name__)
    _RENDERERS[format] = renderer_class


def get_renderer(format: FeedFormat) -> Type[AbstractFeedRenderer]:
    """Feed renderer class registered for ``format``"""
    return _RENDERERS[FeedFormat.normalize(format)]


__all__ = [
    "AbstractRenderer",
    "AbstractFeedRenderer",
    "DeletedEntryRenderer",
    "RssFeedRenderer",
    "RssEntryRenderer",
    "AtomFeedRenderer",
    "AtomEntryRenderer",
    "register_renderer",
    "get_renderer",
]

"""
Feeds Module
============
Feed aggregate, format selection and renderers.

Exports:
    - Feed: Ordered entries/tombstones plus metadata, with export()
    - FeedFormat: RSS/Atom format enum
    - RssFeedRenderer / AtomFeedRenderer: Format renderers
    - register_renderer / get_renderer: Format -> renderer table
"""

from .formats import FeedFormat
from .feed import Feed
from .renderers import (
    AbstractFeedRenderer,
    AtomFeedRenderer,
    RssFeedRenderer,
    get_renderer,
    register_renderer,
)

__all__ = [
    'Feed',
    'FeedFormat',
    'AbstractFeedRenderer',
    'RssFeedRenderer',
    'AtomFeedRenderer',
    'get_renderer',
    'register_renderer',
]

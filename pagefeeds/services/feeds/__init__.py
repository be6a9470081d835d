"""Feed acquisition subsystem.

Structure:
- base.py: item types shared by parsers and renderers
- transport.py: async HTTPS fetcher with the outbound identification headers
- entities.py: the small entity codec used on feed text and rendered markup
- spiders/: one module per upstream dialect (channel, entry, social listing)

Parsing is pattern-based and lenient on purpose; only title and link are
required per item, every other field is optional.
"""

from .base import FeedItem, SocialPost

__all__ = ["FeedItem", "SocialPost"]

from __future__ import annotations

import logging
import urllib.parse
from typing import List, Union

from ..base import FeedItem
from ..transport import Transport
from .patterns import as_text, field, iter_blocks, text_field

logger = logging.getLogger(__name__)


def google_news_rss_url(query: str) -> str:
    q = urllib.parse.quote(query)
    return f"https://news.google.com/rss/search?q={q}&hl=en-US&gl=US&ceid=US:en"


def parse_channel_feed(raw: Union[str, bytes], max_items: int) -> List[FeedItem]:
    """Extract up to ``max_items`` items from a channel-style (RSS 2.0) feed.

    Items without both a title and a link are dropped; malformed or truncated
    ``<item>`` blocks are skipped.
    """
    items: List[FeedItem] = []
    if max_items <= 0:
        return items
    skipped = 0
    for block in iter_blocks(as_text(raw), "item"):
        title = text_field(block, "title")
        link = text_field(block, "link")
        if not title or not link:
            skipped += 1
            continue
        items.append(
            FeedItem(
                title=title,
                url=link,
                published_at=field(block, "pubDate"),
                source=text_field(block, "source"),
            )
        )
        if len(items) >= max_items:
            break
    if skipped:
        logger.debug("channel feed: skipped %d incomplete item(s)", skipped)
    return items


async def fetch_news(transport: Transport, query: str, max_items: int) -> List[FeedItem]:
    """Search news for ``query`` and return parsed items in feed order."""
    url = google_news_rss_url(query)
    body = await transport.fetch(url)
    return parse_channel_feed(body, max_items)

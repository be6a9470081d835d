from __future__ import annotations

import logging
from typing import List, Optional, Union

from ..base import FeedItem
from .patterns import as_text, field, iter_blocks, tag_attributes, text_field

logger = logging.getLogger(__name__)


def _entry_link(block: str) -> Optional[str]:
    """href of the alternate link; Atom treats a missing rel as alternate."""
    fallback = None
    for attrs in tag_attributes(block, "link"):
        href = (attrs.get("href") or "").strip()
        if not href:
            continue
        if attrs.get("rel", "alternate").lower() == "alternate":
            return href
        if fallback is None:
            fallback = href
    return fallback


def parse_entry_feed(raw: Union[str, bytes], max_items: int) -> List[FeedItem]:
    """Extract up to ``max_items`` entries from an entry-style (Atom) feed."""
    items: List[FeedItem] = []
    if max_items <= 0:
        return items
    skipped = 0
    for block in iter_blocks(as_text(raw), "entry"):
        title = text_field(block, "title")
        link = _entry_link(block)
        if not title or not link:
            skipped += 1
            continue
        items.append(
            FeedItem(
                title=title,
                url=link,
                published_at=field(block, "published") or field(block, "updated"),
            )
        )
        if len(items) >= max_items:
            break
    if skipped:
        logger.debug("entry feed: skipped %d incomplete entr(ies)", skipped)
    return items

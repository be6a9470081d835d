"""Social "hot" listing source.

The listing is read either from the JSON listing endpoint, which carries vote
and comment counts, or from the entry-style feed, which does not.
"""

from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Any, List, Optional, Union

from pagefeeds.errors import ParseError

from ..base import SocialPost
from ..transport import Transport
from .atom_spider import parse_entry_feed
from .patterns import as_text

logger = logging.getLogger(__name__)

_SITE = "https://reddit.com"


def social_listing_url(subreddit: str, limit: int, feed_format: str = "json") -> str:
    sub = urllib.parse.quote(subreddit.strip().strip("/"), safe="")
    if feed_format == "atom":
        return f"https://www.reddit.com/r/{sub}/hot.rss?limit={int(limit)}"
    return f"https://www.reddit.com/r/{sub}/hot.json?limit={int(limit)}&raw_json=1"


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_social_listing(raw: Union[str, bytes], max_items: int) -> List[SocialPost]:
    """Parse a JSON listing into posts, in listing order.

    Raises ParseError when the payload is not a listing at all; individual
    malformed children are skipped.
    """
    try:
        payload = json.loads(as_text(raw))
    except ValueError as exc:
        raise ParseError(f"Listing is not valid JSON: {exc}") from exc
    data = payload.get("data") if isinstance(payload, dict) else None
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        raise ParseError("Listing has no data.children array")

    posts: List[SocialPost] = []
    for child in children:
        data = child.get("data") if isinstance(child, dict) else None
        if not isinstance(data, dict):
            continue
        title = str(data.get("title") or "").strip()
        permalink = str(data.get("permalink") or "").strip()
        if not title or not permalink:
            continue
        posts.append(
            SocialPost(
                title=title,
                url=urllib.parse.urljoin(_SITE, permalink),
                upvotes=_opt_int(data.get("ups")),
                comment_count=_opt_int(data.get("num_comments")),
            )
        )
        if len(posts) >= max_items:
            break
    return posts


async def fetch_social_posts(
    transport: Transport,
    subreddit: str,
    max_items: int,
    *,
    feed_format: str = "json",
) -> List[SocialPost]:
    url = social_listing_url(subreddit, max_items, feed_format)
    body = await transport.fetch(url)
    if feed_format == "atom":
        return [SocialPost(title=e.title, url=e.url) for e in parse_entry_feed(body, max_items)]
    return parse_social_listing(body, max_items)

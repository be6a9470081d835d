"""HTML fragments for the managed page regions.

Each renderer returns one item's markup, indented with ``indent`` and nested
four spaces per level, mirroring the hand-written markup of the page. No
leading or trailing newline: the merge engine joins fragments.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

from pagefeeds.services.feeds.base import FeedItem, SocialPost
from pagefeeds.services.feeds.entities import encode_for_attribute, encode_for_text

DEFAULT_INDENT = " " * 12
META_SEPARATOR = " • "
_STEP = " " * 4


def _link_open(url: str) -> str:
    return f'<a href="{encode_for_attribute(url)}" target="_blank" rel="noopener">'


def format_short_date(raw: Optional[str]) -> str:
    """``Mon, 01 Jan 2024 12:00:00 GMT`` -> ``Jan 1, 2024``; ``""`` if unparseable."""
    if not raw or not raw.strip():
        return ""
    try:
        dt = date_parser.parse(raw.strip())
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return ""
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_long_date(dt: datetime) -> str:
    return f"{dt:%B} {dt.day}, {dt.year}"


def render_social_post(post: SocialPost, indent: str = DEFAULT_INDENT) -> str:
    i1, i2 = indent + _STEP, indent + _STEP * 2
    lines = [
        f'{indent}<div class="reddit-post">',
        f"{i1}{_link_open(post.url)}",
        f'{i2}<span class="post-title">{encode_for_text(post.title)}</span>',
        f"{i1}</a>",
    ]
    meta = []
    if post.upvotes is not None:
        meta.append(f'{i2}<span class="upvotes">⬆️ {post.upvotes:,}</span>')
    if post.comment_count is not None:
        meta.append(f'{i2}<span class="comments">💬 {post.comment_count:,} comments</span>')
    if meta:
        lines.append(f'{i1}<div class="post-meta">')
        lines.extend(meta)
        lines.append(f"{i1}</div>")
    lines.append(f"{indent}</div>")
    return "\n".join(lines)


def render_news_item(item: FeedItem, css_class: str = "news-item", indent: str = DEFAULT_INDENT) -> str:
    i1, i2 = indent + _STEP, indent + _STEP * 2
    parts = [encode_for_text(item.source) if item.source else "", format_short_date(item.published_at)]
    meta = META_SEPARATOR.join(p for p in parts if p)
    return "\n".join(
        [
            f'{indent}<div class="{css_class}">',
            f"{i1}{_link_open(item.url)}",
            f"{i2}{encode_for_text(item.title)}",
            f"{i1}</a>",
            f'{i1}<div class="news-source">{meta}</div>',
            f"{indent}</div>",
        ]
    )


def render_impeachment_item(item: FeedItem, indent: str = DEFAULT_INDENT) -> str:
    return render_news_item(item, css_class="impeachment-item", indent=indent)

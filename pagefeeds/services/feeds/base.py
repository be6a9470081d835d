from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FeedItem:
    title: str
    url: str
    published_at: Optional[str] = None  # raw date text as given by the feed
    source: Optional[str] = None


@dataclass(frozen=True)
class SocialPost:
    title: str
    url: str
    upvotes: Optional[int] = None
    comment_count: Optional[int] = None

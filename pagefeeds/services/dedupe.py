"""Title-based deduplication.

The normalized title is the only key: two outlets often carry the same story
under different links, so URLs are never compared.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set, TypeVar

from pagefeeds.errors import RegionNotFound
from pagefeeds.services.document import Document

T = TypeVar("T")  # FeedItem or SocialPost, anything with a .title


def normalize_title(title: str) -> str:
    return (title or "").strip().casefold()


def dedupe_batch(items: Iterable[T]) -> List[T]:
    seen: Set[str] = set()
    out: List[T] = []
    for item in items:
        key = normalize_title(item.title)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def existing_titles(document: Document, region_selector: str, item_selector: str) -> Set[str]:
    """Normalized link texts of the items currently rendered in a region."""
    try:
        region = document.region(region_selector)
    except RegionNotFound:
        return set()
    titles: Set[str] = set()
    for node in document.items(region, item_selector):
        link = node.find("a")
        text = link.get_text(" ", strip=True) if link is not None else node.get_text(" ", strip=True)
        if text:
            titles.add(normalize_title(text))
    return titles


def select_new_items(fetched: Sequence[T], existing: Set[str], limit: int) -> List[T]:
    fresh = [item for item in dedupe_batch(fetched) if normalize_title(item.title) not in existing]
    return fresh[: max(0, limit)]

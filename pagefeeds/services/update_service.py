"""Page update run: fetch each managed region's feed and merge it into the page.

Regions are processed one after another in a fixed order (social, primary
news, secondary news). A failing feed only costs its own region. The page is
written, and its "Last updated" stamp refreshed, only when at least one
region received new items.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from pagefeeds.config import Settings
from pagefeeds.errors import FeedError, RegionNotFound
from pagefeeds.services.dedupe import existing_titles, select_new_items
from pagefeeds.services.document import Document, Region
from pagefeeds.services.feeds.spiders import fetch_news, fetch_social_posts
from pagefeeds.services.feeds.transport import Transport
from pagefeeds.services.render import (
    META_SEPARATOR,
    format_long_date,
    render_impeachment_item,
    render_news_item,
    render_social_post,
)

logger = logging.getLogger(__name__)

TIMESTAMP_SELECTOR = ".last-updated"
_STEP = " " * 4

Source = Callable[[], Awaitable[Sequence[Any]]]
Renderer = Callable[..., str]


@dataclass
class RegionSpec:
    name: str
    label: str
    selector: str
    item_selector: str
    limit: int
    source: Source
    render: Renderer
    # Ranked listings rotate on their own; only news regions skip titles already shown
    dedupe_existing: bool = True
    heading_selector: Optional[str] = None


@dataclass
class UpdateResult:
    changed: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    written: bool = False
    timestamp: Optional[str] = None


def format_timestamp(now: datetime) -> str:
    now = now.astimezone(timezone.utc) if now.tzinfo else now
    return f"Last updated: {format_long_date(now)}{META_SEPARATOR}{now:%H:%M} UTC"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def default_region_specs(settings: Settings, transport: Transport) -> List[RegionSpec]:
    return [
        RegionSpec(
            name="social",
            label=f"r/{settings.social_subreddit} hot posts",
            selector=".reddit-posts",
            item_selector=".reddit-post",
            limit=settings.social_limit,
            source=partial(
                fetch_social_posts,
                transport,
                settings.social_subreddit,
                settings.social_limit,
                feed_format=settings.social_feed_format,
            ),
            render=render_social_post,
            dedupe_existing=False,
        ),
        RegionSpec(
            name="news",
            label=f"{settings.news_query} news",
            selector=".news-items",
            item_selector=".news-item",
            limit=settings.news_limit,
            source=partial(fetch_news, transport, settings.news_query, _pool_size(settings.news_limit)),
            render=render_news_item,
        ),
        RegionSpec(
            name="impeachment",
            label=f"{settings.secondary_news_query} news",
            selector=".impeachment-section",
            item_selector=".impeachment-item",
            limit=settings.secondary_news_limit,
            source=partial(
                fetch_news,
                transport,
                settings.secondary_news_query,
                _pool_size(settings.secondary_news_limit),
            ),
            render=render_impeachment_item,
            heading_selector="h2",
        ),
    ]


def _pool_size(limit: int) -> int:
    # headroom so titles already on the page can be filtered out
    return max(limit * 4, 20)


class PageUpdater:
    def __init__(
        self,
        regions: Sequence[RegionSpec],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.regions = list(regions)
        self.clock = clock

    async def update_document(self, document: Document) -> UpdateResult:
        """Apply every region update to ``document`` in memory."""
        result = UpdateResult()
        changed = False
        for spec in self.regions:
            if await self._update_region(document, spec, result):
                result.changed.append(spec.name)
                changed = True

        if changed:
            result.timestamp = format_timestamp(self.clock())
            try:
                document.replace_inner(document.region(TIMESTAMP_SELECTOR), result.timestamp)
            except RegionNotFound:
                logger.warning("No %s element; timestamp not updated", TIMESTAMP_SELECTOR)
        return result

    async def run(self, path: str) -> UpdateResult:
        document = Document.load(path)
        result = await self.update_document(document)
        if result.changed:
            document.save(path)
            result.written = True
            logger.info("%s written (%s).", path, ", ".join(result.changed))
        else:
            logger.info("No updates applied; %s unchanged.", path)
        return result

    async def _update_region(self, document: Document, spec: RegionSpec, result: UpdateResult) -> bool:
        try:
            region = document.region(spec.selector)
        except RegionNotFound as exc:
            logger.info("Skipping %s: %s", spec.label, exc)
            result.skipped.append((spec.name, str(exc)))
            return False

        logger.info("Fetching %s...", spec.label)
        try:
            fetched = await spec.source()
        except FeedError as exc:
            logger.warning("SKIPPED %s (%s)", spec.label, exc)
            result.skipped.append((spec.name, str(exc)))
            return False

        existing = existing_titles(document, spec.selector, spec.item_selector) if spec.dedupe_existing else set()
        candidates = select_new_items(fetched, existing, spec.limit)
        if not candidates:
            logger.info("%s: %d fetched, nothing new.", spec.label, len(fetched))
            return False

        document.replace_inner(region, self._compose(document, region, spec, candidates))
        logger.info("%s: %d new item(s) applied.", spec.label, len(candidates))
        return True

    def _compose(self, document: Document, region: Region, spec: RegionSpec, candidates: Sequence[Any]) -> str:
        closing = document.closing_indent(region)
        indent = closing + _STEP
        parts: List[str] = []

        if spec.heading_selector:
            heading = region.tag.select_one(spec.heading_selector)
            if heading is not None:
                parts.append(f"\n{indent}{document.outer_html(heading)}\n")

        parts.extend("\n" + spec.render(item, indent=indent) for item in candidates)

        if spec.dedupe_existing:
            # already-shown items stay below the new ones, up to the region's size
            room = spec.limit - len(candidates)
            for node in document.items(region, spec.item_selector)[: max(0, room)]:
                parts.append(f"\n{indent}{document.outer_html(node)}")

        parts.append("\n" + closing)
        return "".join(parts)


def build_updater(settings: Settings, transport: Transport, **kwargs) -> PageUpdater:
    return PageUpdater(default_region_specs(settings, transport), **kwargs)


async def update_page(
    settings: Settings,
    *,
    transport: Optional[Transport] = None,
    clock: Callable[[], datetime] = _utcnow,
) -> UpdateResult:
    """Run one fetch-merge-persist pass over ``settings.page_path``."""
    transport = transport or Transport(
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
        max_redirects=settings.max_redirects,
    )
    async with transport:
        return await build_updater(settings, transport, clock=clock).run(settings.page_path)

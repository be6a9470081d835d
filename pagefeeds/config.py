"""Runtime configuration for the page updater and checker.

Configuration via environment variables (all optional):

- PAGE_PATH: managed HTML document (default: index.html)
- HTTP_TIMEOUT: per-request timeout in seconds (default: 20)
- USER_AGENT: identifying client string sent with every request
- SOCIAL_SUBREDDIT: community whose hot listing feeds the social region
- SOCIAL_FEED_FORMAT: "json" (listing API) or "atom" (entry feed)
- NEWS_QUERY / SECONDARY_NEWS_QUERY: news search queries
- SOCIAL_LIMIT / NEWS_LIMIT / SECONDARY_NEWS_LIMIT: items per region
- LOG_LEVEL: logging level name (default: INFO)
"""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "brokenchocolate-updater/1.0 (https://github.com/DutchPvR/Brokenchocolate)"


class Settings(BaseModel):
    page_path: str = Field("index.html", description="Path of the managed HTML document")
    http_timeout: float = Field(20.0, gt=0, description="Per-request timeout (seconds)")
    max_redirects: int = Field(10, ge=0)
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1)
    social_subreddit: str = Field("Epstein", min_length=1)
    social_feed_format: Literal["json", "atom"] = "json"
    news_query: str = Field("Epstein", min_length=1)
    secondary_news_query: str = Field("Trump impeachment", min_length=1)
    social_limit: int = Field(5, ge=1)
    news_limit: int = Field(5, ge=1)
    secondary_news_limit: int = Field(2, ge=1)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        keys = {
            "page_path": "PAGE_PATH",
            "http_timeout": "HTTP_TIMEOUT",
            "max_redirects": "HTTP_MAX_REDIRECTS",
            "user_agent": "USER_AGENT",
            "social_subreddit": "SOCIAL_SUBREDDIT",
            "social_feed_format": "SOCIAL_FEED_FORMAT",
            "news_query": "NEWS_QUERY",
            "secondary_news_query": "SECONDARY_NEWS_QUERY",
            "social_limit": "SOCIAL_LIMIT",
            "news_limit": "NEWS_LIMIT",
            "secondary_news_limit": "SECONDARY_NEWS_LIMIT",
            "log_level": "LOG_LEVEL",
        }
        values = {}
        for field, var in keys.items():
            raw = env.get(var)
            if raw is not None and raw.strip():
                values[field] = raw.strip()
        if "social_feed_format" in values:
            values["social_feed_format"] = values["social_feed_format"].lower()
        return cls(**values)

from .atom_spider import parse_entry_feed
from .rss_spider import google_news_rss_url, parse_channel_feed, fetch_news
from .social_spider import fetch_social_posts, parse_social_listing

__all__ = [
    "parse_entry_feed",
    "parse_channel_feed",
    "google_news_rss_url",
    "fetch_news",
    "fetch_social_posts",
    "parse_social_listing",
]

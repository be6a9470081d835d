"""Refresh the feed-driven regions of a static page and check its shape."""

__version__ = "1.0.0"

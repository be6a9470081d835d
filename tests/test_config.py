import pytest
from pydantic import ValidationError

from pagefeeds.config import DEFAULT_USER_AGENT, Settings


def test_defaults_without_environment():
    settings = Settings.from_env({})
    assert settings.page_path == "index.html"
    assert settings.http_timeout == 20.0
    assert settings.max_redirects == 10
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.social_feed_format == "json"
    assert (settings.social_limit, settings.news_limit, settings.secondary_news_limit) == (5, 5, 2)
    assert settings.secondary_news_query == "Trump impeachment"


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "PAGE_PATH": "site/index.html",
            "HTTP_TIMEOUT": "7.5",
            "SOCIAL_FEED_FORMAT": " ATOM ",
            "NEWS_QUERY": "Maxwell",
            "NEWS_LIMIT": "3",
            "LOG_LEVEL": "DEBUG",
            "USER_AGENT": "   ",
        }
    )
    assert settings.page_path == "site/index.html"
    assert settings.http_timeout == 7.5
    assert settings.social_feed_format == "atom"
    assert settings.news_query == "Maxwell"
    assert settings.news_limit == 3
    assert settings.log_level == "DEBUG"
    # blank values fall back to the default
    assert settings.user_agent == DEFAULT_USER_AGENT


@pytest.mark.parametrize(
    "env",
    [
        {"HTTP_TIMEOUT": "0"},
        {"HTTP_TIMEOUT": "soon"},
        {"NEWS_LIMIT": "0"},
        {"SOCIAL_FEED_FORMAT": "xml"},
    ],
)
def test_invalid_values_are_rejected(env):
    with pytest.raises(ValidationError):
        Settings.from_env(env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SOCIAL_SUBREDDIT", "news")
    assert Settings.from_env().social_subreddit == "news"

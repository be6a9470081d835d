from pagefeeds.services.dedupe import dedupe_batch, existing_titles, normalize_title, select_new_items
from pagefeeds.services.document import Document
from pagefeeds.services.feeds.base import FeedItem, SocialPost


def _items(*titles):
    return [FeedItem(title=t, url=f"https://x.test/{i}") for i, t in enumerate(titles)]


def test_normalize_title_trims_and_casefolds():
    assert normalize_title("  Foo BAR \n") == "foo bar"
    assert normalize_title("Straße") == normalize_title("STRASSE")


def test_dedupe_batch_first_occurrence_wins():
    items = _items("Alpha", "beta", " ALPHA ", "Gamma", "Beta")
    out = dedupe_batch(items)
    assert [i.url for i in out] == ["https://x.test/0", "https://x.test/1", "https://x.test/3"]


def test_dedupe_batch_is_idempotent():
    items = _items("a", "b", "A", "c", "b ", "d")
    once = dedupe_batch(items)
    assert dedupe_batch(once) == once


def test_dedupe_ignores_url_differences():
    items = [FeedItem("Same story", "https://one.test/"), FeedItem("same story", "https://two.test/")]
    assert len(dedupe_batch(items)) == 1


def test_existing_titles_reads_region_items(page_html):
    doc = Document(page_html)
    assert existing_titles(doc, ".news-items", ".news-item") == {"foo bar"}
    assert existing_titles(doc, ".reddit-posts", ".reddit-post") == {"old hot post"}
    assert existing_titles(doc, ".missing-region", ".news-item") == set()


def test_select_new_items_filters_existing_case_insensitively():
    fetched = _items("foo bar", "Baz", "baz")
    assert [i.title for i in select_new_items(fetched, {"foo bar"}, 5)] == ["Baz"]


def test_select_new_items_truncates_after_filtering():
    fetched = _items("Old", "N1", "N2", "N3")
    assert [i.title for i in select_new_items(fetched, {"old"}, 2)] == ["N1", "N2"]


def test_select_new_items_works_for_social_posts():
    posts = [SocialPost("Hot", "https://r.test/1", 3, 1), SocialPost("hot", "https://r.test/2")]
    assert select_new_items(posts, set(), 5) == posts[:1]

import pytest

from pagefeeds.errors import RegionNotFound
from pagefeeds.services.document import Document


def test_serialize_without_ops_is_identical(page_html):
    doc = Document(page_html)
    assert doc.serialize() == page_html
    assert not doc.changed


def test_region_spans_cover_inner_content(page_html):
    doc = Document(page_html)
    region = doc.region(".news-items")
    assert page_html[region.outer_start:region.inner_start] == '<div class="news-items">'
    assert page_html[region.inner_end:region.outer_end] == "</div>"
    inner = page_html[region.inner_start:region.inner_end]
    assert inner.count('<div class="news-item">') == 1
    assert inner.endswith("\n            ")


def test_replace_inner_preserves_everything_else(page_html):
    doc = Document(page_html)
    region = doc.region(".last-updated")
    doc.replace_inner(region, "Last updated: now")
    out = doc.serialize()

    assert doc.changed
    assert '<p class="last-updated">Last updated: now</p>' in out
    assert out[:region.inner_start] == page_html[:region.inner_start]
    assert out[region.inner_start + len("Last updated: now"):] == page_html[region.inner_end:]
    # formatting the parser would normally rewrite stays as written
    assert "<meta charset='utf-8'>" in out
    assert "Live answers &amp; news." in out


def test_multiple_replacements_apply_independently(page_html):
    doc = Document(page_html)
    doc.replace_inner(doc.region(".reddit-posts"), "R")
    doc.replace_inner(doc.region(".news-items"), "N")
    out = doc.serialize()
    assert '<div class="reddit-posts">R</div>' in out
    assert '<div class="news-items">N</div>' in out
    assert "commented-out copy must survive" in out


def test_region_not_found_raises():
    doc = Document("<html><body><p>hi</p></body></html>")
    with pytest.raises(RegionNotFound):
        doc.region(".news-items")


def test_nested_same_tag_region_ends_at_matching_close():
    html = '<div class="outer"><div class="x"><div>a</div><div>b</div></div><p>tail</p></div>'
    doc = Document(html)
    region = doc.region(".x")
    assert html[region.inner_start:region.inner_end] == "<div>a</div><div>b</div>"


def test_outer_html_returns_source_markup(page_html):
    doc = Document(page_html)
    heading = doc.region(".impeachment-section").tag.select_one("h2")
    assert doc.outer_html(heading) == "<h2>Impeachment Watch</h2>"


def test_closing_indent(page_html):
    doc = Document(page_html)
    assert doc.closing_indent(doc.region(".reddit-posts")) == " " * 8
    assert doc.closing_indent(doc.region(".last-updated")) == ""


def test_crlf_document_round_trips():
    html = '<html>\r\n<body>\r\n  <div class="news-items">\r\n    <p>x</p>\r\n  </div>\r\n</body>\r\n</html>\r\n'
    doc = Document(html)
    region = doc.region(".news-items")
    doc.replace_inner(region, "\r\n    <p>y</p>\r\n  ")
    assert doc.serialize() == html.replace("<p>x</p>", "<p>y</p>")


def test_load_and_save_round_trip(page_path, page_html):
    doc = Document.load(str(page_path))
    doc.save(str(page_path))
    assert page_path.read_bytes() == page_html.encode("utf-8")


def test_region_span_ignores_markup_inside_scripts():
    html = (
        '<div class="news-items"><script>var s = "<div>";</script>'
        '<style>p:after { content: "</div>"; }</style><p>x</p></div><p class="tail">t</p>'
    )
    doc = Document(html)
    region = doc.region(".news-items")
    assert html[region.outer_end:] == '<p class="tail">t</p>'
    doc.replace_inner(region, "new")
    assert doc.serialize() == '<div class="news-items">new</div><p class="tail">t</p>'

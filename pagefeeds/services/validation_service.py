"""Content completeness checks for the managed page.

Guards against an update run leaving a section empty or dropping required
metadata. The page is parsed independently of the updater (selectolax) and is
never modified; problems are reported as failed checks, not exceptions.
"""

from __future__ import annotations

from typing import Optional

from selectolax.parser import HTMLParser, Node

from pagefeeds.models.report import ValidationReport


def _text(node: Optional[Node]) -> str:
    return (node.text(strip=True) or "").strip() if node is not None else ""


def _attr(node: Optional[Node], name: str) -> str:
    if node is None:
        return ""
    return (node.attributes.get(name) or "").strip()


def _check_linked_items(report: ValidationReport, doc: HTMLParser, section: str, css_class: str) -> None:
    items = doc.css(f".{css_class}")
    report.check(section, f"at least 1 .{css_class} present", len(items) >= 1)
    for i, item in enumerate(items):
        link = item.css_first("a")
        report.check(section, f"  {css_class}[{i}] has a non-empty link", bool(_text(link)))
        report.check(section, f"  {css_class}[{i}] link has href", bool(_attr(link, "href")))


def validate_document(html: str) -> ValidationReport:
    doc = HTMLParser(html)
    report = ValidationReport()

    section = "Metadata"
    report.check(section, "<title> is present and non-empty", bool(_text(doc.css_first("title"))))
    report.check(
        section,
        '<meta name="description"> has a non-empty content attribute',
        bool(_attr(doc.css_first('meta[name="description"]'), "content")),
    )
    report.check(section, "<html> has a lang attribute", doc.css_first("html[lang]") is not None)

    section = "Jail Status section"
    answer = doc.css_first(".jail-answer")
    report.check(section, ".jail-answer element exists", answer is not None)
    report.check(section, ".jail-answer text is non-empty", bool(_text(answer)))

    section = "Impeachment Watch section"
    report.check(section, ".impeachment-section exists", doc.css_first(".impeachment-section") is not None)
    _check_linked_items(report, doc, section, "impeachment-item")

    _check_linked_items(report, doc, "Reddit section", "reddit-post")
    _check_linked_items(report, doc, "Latest News section", "news-item")

    section = "Deep Dive section"
    links = doc.css(".deepdive-link")
    report.check(section, "at least 1 .deepdive-link present", len(links) >= 1)
    for i, link in enumerate(links):
        report.check(section, f"  deepdive-link[{i}] has href", bool(_attr(link, "href")))
        report.check(section, f"  deepdive-link[{i}] has non-empty text", bool(_text(link)))

    section = "Footer"
    report.check(
        section,
        ".last-updated element exists and is non-empty",
        bool(_text(doc.css_first(".last-updated"))),
    )
    report.check(section, "GitHub link present in footer", doc.css_first('footer a[href*="github.com"]') is not None)

    return report


def validate_file(path: str) -> ValidationReport:
    try:
        with open(path, "r", encoding="utf-8") as f:
            html = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        report = ValidationReport()
        report.check("Document", f"{path} is readable ({exc})", False)
        return report
    return validate_document(html)

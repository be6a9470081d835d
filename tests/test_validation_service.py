from pagefeeds.models.report import ValidationReport
from pagefeeds.services.validation_service import validate_document, validate_file


def test_sample_page_passes(page_html):
    report = validate_document(page_html)
    assert report.ok, [c.description for c in report.failed()]
    sections = {c.section for c in report.checks}
    assert {"Metadata", "Impeachment Watch section", "Reddit section", "Latest News section", "Footer"} <= sections


def test_missing_impeachment_region_fails_without_raising(page_html):
    start = page_html.index('<section class="impeachment-section">')
    end = page_html.index("</section>", start) + len("</section>")
    report = validate_document(page_html[:start] + page_html[end:])
    assert not report.ok
    failed = {c.description for c in report.failed()}
    assert ".impeachment-section exists" in failed
    assert "at least 1 .impeachment-item present" in failed
    assert report.failures == 2


def test_item_without_href_is_reported(page_html):
    html = page_html.replace('<a href="https://example.com/foo" target="_blank" rel="noopener">', "<a>")
    report = validate_document(html)
    assert [c.description for c in report.failed()] == ["  news-item[0] link has href"]


def test_empty_metadata_and_timestamp(page_html):
    html = (
        page_html.replace("<title>Broken Chocolate</title>", "<title> </title>")
        .replace('<html lang="en">', "<html>")
        .replace("Last updated: January 1, 2024 • 00:00 UTC", "")
    )
    failed = {c.description for c in validate_document(html).failed()}
    assert failed == {
        "<title> is present and non-empty",
        "<html> has a lang attribute",
        ".last-updated element exists and is non-empty",
    }


def test_validate_file_reads_from_disk(page_path):
    assert validate_file(str(page_path)).ok


def test_unreadable_file_is_a_failed_check(tmp_path):
    report = validate_file(str(tmp_path / "missing.html"))
    assert report.failures == 1
    assert report.checks[0].section == "Document"


def test_report_render():
    report = ValidationReport()
    report.check("Metadata", "title present", True)
    report.check("Metadata", "lang present", False)
    report.check("Footer", "timestamp present", True)
    assert report.render() == (
        "\nMetadata:\n"
        "  ✓ title present\n"
        "  ✗ lang present\n"
        "\nFooter:\n"
        "  ✓ timestamp present\n"
        "\n1 check(s) failed.\n"
    )


def test_report_render_all_passed():
    report = ValidationReport()
    report.check("Footer", "timestamp present", True)
    assert report.render().endswith("\nAll checks passed.\n")

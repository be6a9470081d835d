from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    with open(FIXTURES / name, "r", encoding="utf-8", newline="") as f:
        return f.read()


@pytest.fixture
def page_html() -> str:
    return read_fixture("index.html")


@pytest.fixture
def page_path(tmp_path, page_html):
    path = tmp_path / "index.html"
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(page_html)
    return path

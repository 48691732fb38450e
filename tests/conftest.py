"""Shared pytest fixtures."""

import pytest
from pathlib import Path

from munge.document import parse_document


class CountingDocument:
    """Document wrapper that records every query made against it."""

    def __init__(self, html: str):
        self.inner = parse_document(html)
        self.calls: list[tuple[str, str]] = []

    def query(self, selector):
        self.calls.append(("query", selector))
        return self.inner.query(selector)

    def query_all(self, selector):
        self.calls.append(("query_all", selector))
        return self.inner.query_all(selector)


@pytest.fixture
def examples_dir():
    """Path to tests/examples/ containing .munge programs and page.html."""
    return Path(__file__).parent / "examples"


@pytest.fixture(params=["profile.munge", "links.munge", "viewport.munge"])
def example_file(examples_dir, request):
    """Parametrized: one of the example .munge programs."""
    return examples_dir / request.param


@pytest.fixture
def page_html(examples_dir):
    return (examples_dir / "page.html").read_text(encoding="utf-8")


@pytest.fixture
def page(page_html):
    return parse_document(page_html)


@pytest.fixture
def counting_document():
    """Factory: build a CountingDocument from HTML text."""
    return CountingDocument

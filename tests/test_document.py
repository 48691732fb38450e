"""Tests for the BeautifulSoup-backed document."""

from munge.document import HtmlNode, parse_document


def test_query_returns_first_match(page):
    node = page.query("li.item")
    assert isinstance(node, HtmlNode)
    assert node.text() == "One"


def test_query_without_match_is_none(page):
    assert page.query("#nothing") is None
    assert page.query_all("#nothing") == []


def test_query_all_keeps_document_order(page):
    assert [n.attribute("data-id") for n in page.query_all("li.item")] == ["1", "2", "3"]


def test_attributes():
    node = parse_document('<a class="x y" href="/home">Home</a>').query("a")
    assert node.attribute("class") == "x y"
    assert node.attribute("href") == "/home"
    assert node.attribute("title") is None


def test_html_serialization():
    node = parse_document("<p id=a>Hi <i>there</i></p>").query("#a")
    assert node.inner_html() == "Hi <i>there</i>"
    assert node.outer_html() == '<p id="a">Hi <i>there</i></p>'
    assert node.text() == "Hi there"

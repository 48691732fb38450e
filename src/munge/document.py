"""HTML document capability consumed by the executor.

The executor only relies on the ``Document``/``Node`` protocols below. The
default implementation wraps BeautifulSoup; CSS selectors are answered by
soupsieve through ``select_one``/``select``.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from bs4 import BeautifulSoup, Tag


class Node(Protocol):
    def attribute(self, name: str) -> Optional[str]: ...

    def text(self) -> str: ...

    def inner_html(self) -> str: ...

    def outer_html(self) -> str: ...


class Document(Protocol):
    def query(self, selector: str) -> Optional[Node]: ...

    def query_all(self, selector: str) -> Sequence[Node]: ...


@dataclass
class HtmlNode:
    tag: Tag

    def attribute(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        return self.tag.get_text()

    def inner_html(self) -> str:
        return self.tag.decode_contents()

    def outer_html(self) -> str:
        return str(self.tag)

    def __repr__(self) -> str:
        return f"HtmlNode(<{self.tag.name}>)"


class HtmlDocument:
    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def query(self, selector: str) -> Optional[HtmlNode]:
        tag = self.soup.select_one(selector)
        return HtmlNode(tag) if tag is not None else None

    def query_all(self, selector: str) -> list[HtmlNode]:
        return [HtmlNode(tag) for tag in self.soup.select(selector)]


def parse_document(html: str, parser: str = "html.parser") -> HtmlDocument:
    """Parse HTML text into a queryable document."""
    # Keep multi-valued attributes such as class as their raw string.
    soup = BeautifulSoup(html, parser, multi_valued_attributes=None)
    return HtmlDocument(soup)

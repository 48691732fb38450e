"""Compile a munge program once, run it against many HTML documents."""

from typing import Optional

from munge.ast_nodes import Program
from munge.document import parse_document
from munge.executor import Value, run
from munge.parser import parse


class Munger:
    def __init__(self, source: str, path: Optional[str] = None, html_parser: str = "html.parser"):
        self.program: Program = parse(source, path)
        self.html_parser = html_parser

    def munge(self, html: str) -> dict[str, Value]:
        """Extract this program's results from ``html``."""
        return run(self.program, parse_document(html, self.html_parser))


def munge(source: str, html: str) -> dict[str, Value]:
    return Munger(source).munge(html)

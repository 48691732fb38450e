"""AST node definitions for munge. The parser builds them; the executor only reads them."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class RangeMode(Enum):
    WHOLE = "whole"            # no range: first match only
    INDEX = "index"            # (N)
    OPEN_SLICE = "open_slice"  # (N,)
    SLICE = "slice"            # (N,M)


@dataclass(frozen=True)
class SourceLoc:
    line: int
    column: int
    path: Optional[str] = None


@dataclass(frozen=True)
class Range:
    start: Optional[int] = None
    end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.end is not None and self.start is None:
            raise ValueError("Range end requires a start")

    @property
    def mode(self) -> RangeMode:
        if self.start is None:
            return RangeMode.WHOLE
        if self.end is None:
            return RangeMode.OPEN_SLICE
        if self.end == self.start:
            return RangeMode.INDEX
        return RangeMode.SLICE


@dataclass(frozen=True)
class Selection:
    selector: str
    range: Range = Range()
    attributes: Optional[tuple[str, ...]] = None


# --- Statements ---

class Statement:
    """Base for statements; subclasses are frozen dataclasses with loc last."""


@dataclass(frozen=True)
class Assignment(Statement):
    identifier: str
    selection: Selection
    loc: Optional[SourceLoc] = None


@dataclass(frozen=True)
class FunctionInvocation(Statement):
    identifiers: tuple[str, ...]
    function: str
    loc: Optional[SourceLoc] = None


@dataclass(frozen=True)
class ReturnSpec(Statement):
    """Only legal as the last element of a function body."""
    names: tuple[str, ...]
    loc: Optional[SourceLoc] = None


@dataclass(frozen=True)
class FunctionDef(Statement):
    name: str
    body: tuple[Union[Assignment, FunctionInvocation], ...]
    returns: ReturnSpec
    loc: Optional[SourceLoc] = None


# --- Program ---

@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...]
    path: Optional[str] = None


def _describe_range(rng: Range) -> str:
    mode = rng.mode
    if mode is RangeMode.WHOLE:
        return ""
    if mode is RangeMode.INDEX:
        return f" ({rng.start})"
    if mode is RangeMode.OPEN_SLICE:
        return f" ({rng.start},)"
    return f" ({rng.start}, {rng.end})"


def describe(stmt: Statement) -> str:
    """Render a statement back to one line of munge source."""
    if isinstance(stmt, Assignment):
        sel = stmt.selection
        attrs = ""
        if sel.attributes is not None:
            attrs = " {" + ", ".join(sel.attributes) + "}"
        return f"{stmt.identifier} = {sel.selector}{attrs}{_describe_range(sel.range)}"
    if isinstance(stmt, FunctionInvocation):
        return f"{', '.join(stmt.identifiers)} = do {stmt.function}"
    if isinstance(stmt, ReturnSpec):
        return "return {" + ", ".join(stmt.names) + "}"
    if isinstance(stmt, FunctionDef):
        return f"def {stmt.name} ({len(stmt.body)} statements) -> {{{', '.join(stmt.returns.names)}}}"
    return type(stmt).__name__

"""Structured errors for munge (lexing, parsing, execution)."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MungeError(Exception):
    """Failure tied to a place in a munge program.

    ``line`` and ``column`` point at the offending token or statement
    (1-based line, 0-based column) and ``path`` names the program file when
    it came from one. Errors raised for programs built without source
    locations carry only the message.
    """
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.path:
            loc = f"{self.path}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
            loc += ":"
        if loc:
            loc += " "
        return f"{loc}{self.message}"


class ParseError(MungeError):
    """Source did not match grammar or tokenization failed."""
    pass


@dataclass
class LexicalError(ParseError):
    """A character cannot start any token."""
    char: str = ""


@dataclass
class UnexpectedTokenError(ParseError):
    """Token stream does not match the grammar at the current position."""
    expected: str = ""
    found: str = ""


class ConfigError(MungeError):
    """Settings file is unreadable or holds invalid values."""
    pass


class ExecutionError(MungeError):
    """Running a parsed program failed."""
    pass


@dataclass
class FunctionError(ExecutionError):
    function: str = ""


class DuplicateFunctionError(FunctionError):
    pass


class UndefinedFunctionError(FunctionError):
    pass


class ArityError(FunctionError):
    """Invocation unpacks more identifiers than the function returns."""
    pass


class RecursiveInvocationError(FunctionError):
    pass


class UndefinedNameError(FunctionError):
    """Return spec names an identifier the body never assigns."""
    pass

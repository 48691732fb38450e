"""Tokenizer for munge: DSL source -> tokens, pulled one at a time by the parser.

Selectors are read as single identifier tokens even though they may contain
spaces, parentheses and ``=``. Whether such a character continues the current
identifier is decided by ``continues_identifier``, which looks back at what
has been collected and ahead to the next non-space text.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from munge.errors import LexicalError


class TokenKind:
    IDENT = "IDENT"
    INTEGER = "INTEGER"
    EOF = "EOF"
    # Reserved symbols
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    EQUALS = "EQUALS"
    NEWLINE = "NEWLINE"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    # Keywords
    DEF = "DEF"
    RETURN = "RETURN"
    DO = "DO"


RESERVED_SYMBOLS = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUALS,
    "\n": TokenKind.NEWLINE,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

KEYWORDS = {
    "def": TokenKind.DEF,
    "return": TokenKind.RETURN,
    "do": TokenKind.DO,
}

# Longest first so a longer keyword is never shadowed by a prefix.
_KEYWORDS_BY_LENGTH = sorted(KEYWORDS, key=len, reverse=True)


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, L{self.line}:{self.column})"


def is_digit(ch: Optional[str]) -> bool:
    return ch is not None and len(ch) == 1 and ch in "0123456789"


def is_space(ch: Optional[str]) -> bool:
    """Intra-line whitespace. Newline is a token, never whitespace."""
    return ch is not None and len(ch) == 1 and ch in " \t\r"


def is_newline(ch: Optional[str]) -> bool:
    return ch == "\n"


def is_reserved(text: Optional[str]) -> bool:
    return text is not None and (text in RESERVED_SYMBOLS or text in KEYWORDS)


def is_identifier_char(ch: Optional[str]) -> bool:
    if ch is None or len(ch) != 1:
        return False
    if is_space(ch) or is_newline(ch) or ch in RESERVED_SYMBOLS:
        return False
    return ch.isprintable()


def keyword_at(source: str, index: int) -> Optional[str]:
    """Keyword starting at ``index``, if it stands as a whole word there."""
    for word in _KEYWORDS_BY_LENGTH:
        if source.startswith(word, index):
            end = index + len(word)
            if end >= len(source) or not is_identifier_char(source[end]):
                return word
    return None


def starts_reserved(source: str, index: int) -> bool:
    if index >= len(source):
        return True
    return source[index] in RESERVED_SYMBOLS or keyword_at(source, index) is not None


def continues_identifier(source: str, index: int, collected: str) -> bool:
    """Whether ``source[index]`` extends the identifier collected so far.

    Rules, in order:
      - an identifier character always continues;
      - ``=``, ``(`` and ``)`` continue only right after an identifier character;
      - a space continues only right after an identifier character, when the
        next non-space text does not start a reserved symbol or keyword, and
        the last word collected is not a keyword.
    """
    if index >= len(source):
        return False
    ch = source[index]
    if is_identifier_char(ch):
        return True
    if not collected or not is_identifier_char(collected[-1]):
        return False
    if ch in ("=", "(", ")"):
        return True
    if is_space(ch):
        ahead = index
        while ahead < len(source) and is_space(source[ahead]):
            ahead += 1
        if starts_reserved(source, ahead):
            return False
        last_word = collected.split()[-1]
        return last_word not in KEYWORDS
    return False


class Lexer:
    """Pull-based tokenizer. ``next_token`` yields EOF forever once input is exhausted."""

    def __init__(self, source: str, path: Optional[str] = None):
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 0

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 0
            else:
                self.column += 1
            self.pos += 1

    def _read_integer(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and is_digit(self.source[self.pos]):
            self._advance()
        return self.source[start:self.pos]

    def _read_identifier(self) -> str:
        start = self.pos
        while continues_identifier(self.source, self.pos, self.source[start:self.pos]):
            self._advance()
        return self.source[start:self.pos].rstrip()

    def next_token(self) -> Token:
        while self.pos < len(self.source):
            c = self.source[self.pos]
            if is_space(c):
                self._advance()
                continue

            line, col = self.line, self.column

            if is_newline(c):
                self._advance()
                return Token(TokenKind.NEWLINE, c, line, col)

            if is_digit(c):
                return Token(TokenKind.INTEGER, self._read_integer(), line, col)

            word = keyword_at(self.source, self.pos)
            if word is not None:
                self._advance(len(word))
                return Token(KEYWORDS[word], word, line, col)

            if c in RESERVED_SYMBOLS:
                self._advance()
                return Token(RESERVED_SYMBOLS[c], c, line, col)

            if is_identifier_char(c):
                return Token(TokenKind.IDENT, self._read_identifier(), line, col)

            raise LexicalError(
                f"Unexpected character: {c!r}", line, col, self.path, char=c,
            )
        return Token(TokenKind.EOF, "", self.line, self.column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return


def tokenize(source: str, path: Optional[str] = None) -> list[Token]:
    """Produce the full token list for ``source``, ending with a single EOF token."""
    return list(Lexer(source, path))

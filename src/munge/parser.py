"""Recursive-descent parser: tokens -> AST. One production per grammar rule.

Program      := (Statement NEWLINE)*
Statement    := "def" IDENT NEWLINE Body
              | IDENT ("," IDENT)* "=" "do" IDENT
              | IDENT "=" Selection
Body         := ((Assignment | Invocation) NEWLINE)* "return" NameList
Selection    := IDENT NameList? Range?
Range        := "(" INTEGER ("," INTEGER?)? ")"
NameList     := "{" IDENT ("," IDENT)* "}"
"""

from typing import Optional, Union

from munge.ast_nodes import (
    Assignment,
    FunctionDef,
    FunctionInvocation,
    Program,
    Range,
    ReturnSpec,
    Selection,
    SourceLoc,
    Statement,
)
from munge.errors import UnexpectedTokenError
from munge.lexer import Lexer, Token, TokenKind


def _show(token: Token) -> str:
    if token.kind == TokenKind.EOF:
        return TokenKind.EOF
    return f"{token.kind} {token.value!r}"


class Parser:
    def __init__(self, lexer: Lexer, path: Optional[str] = None):
        self.lexer = lexer
        self.path = path if path is not None else lexer.path
        self.current = lexer.next_token()

    def peek(self) -> Token:
        return self.current

    def advance(self) -> Token:
        t = self.current
        self.current = self.lexer.next_token()
        return t

    def at(self, kind: str) -> bool:
        return self.current.kind == kind

    def error(self, expected: str, token: Optional[Token] = None) -> UnexpectedTokenError:
        t = token or self.current
        found = _show(t)
        return UnexpectedTokenError(
            f"Expected {expected}, got {found}",
            t.line, t.column, self.path,
            expected=expected, found=found,
        )

    def expect(self, kind: str) -> Token:
        if not self.at(kind):
            raise self.error(kind)
        return self.advance()

    def loc(self, token: Token) -> SourceLoc:
        return SourceLoc(token.line, token.column, self.path)

    def _skip_newlines(self) -> None:
        while self.at(TokenKind.NEWLINE):
            self.advance()

    def _end_statement(self) -> None:
        if self.at(TokenKind.EOF):
            return
        self.expect(TokenKind.NEWLINE)

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while True:
            self._skip_newlines()
            if self.at(TokenKind.EOF):
                break
            statements.append(self.parse_statement())
            self._end_statement()
        return Program(statements=tuple(statements), path=self.path)

    def parse_statement(self) -> Statement:
        if self.at(TokenKind.DEF):
            return self.parse_function()
        if self.at(TokenKind.RETURN):
            raise self.error("a statement ('return' is only valid at the end of a function)")
        return self.parse_binding()

    def parse_binding(self) -> Union[Assignment, FunctionInvocation]:
        """Assignment or function invocation; both start with a target list."""
        start = self.current
        if not self.at(TokenKind.IDENT):
            raise self.error(TokenKind.IDENT)
        targets = [self.advance().value]
        while self.at(TokenKind.COMMA):
            self.advance()
            targets.append(self.expect(TokenKind.IDENT).value)
        self.expect(TokenKind.EQUALS)

        if self.at(TokenKind.DO):
            self.advance()
            name_t = self.expect(TokenKind.IDENT)
            return FunctionInvocation(
                identifiers=tuple(targets), function=name_t.value, loc=self.loc(start),
            )

        if len(targets) > 1:
            raise self.error(f"'do' after {len(targets)} targets")
        selection = self.parse_selection()
        return Assignment(identifier=targets[0], selection=selection, loc=self.loc(start))

    def parse_function(self) -> FunctionDef:
        start = self.advance()  # def
        name_t = self.expect(TokenKind.IDENT)
        self._end_statement()
        body: list[Union[Assignment, FunctionInvocation]] = []
        while True:
            self._skip_newlines()
            if self.at(TokenKind.RETURN):
                break
            if self.at(TokenKind.EOF):
                raise self.error(f"'return' to close function {name_t.value!r}")
            if self.at(TokenKind.DEF):
                raise self.error("a statement (functions cannot be nested)")
            body.append(self.parse_binding())
            self._end_statement()
        returns = self.parse_return()
        return FunctionDef(
            name=name_t.value, body=tuple(body), returns=returns, loc=self.loc(start),
        )

    def parse_return(self) -> ReturnSpec:
        start = self.expect(TokenKind.RETURN)
        names = self.parse_name_list()
        return ReturnSpec(names=names, loc=self.loc(start))

    def parse_selection(self) -> Selection:
        selector_t = self.expect(TokenKind.IDENT)
        attributes = None
        rng = Range()
        if self.at(TokenKind.LBRACE):
            attributes = self.parse_name_list()
        if self.at(TokenKind.LPAREN):
            rng = self.parse_range()
        if not (self.at(TokenKind.NEWLINE) or self.at(TokenKind.EOF)):
            if attributes is None and rng.start is None:
                raise self.error(f"{TokenKind.LBRACE}, {TokenKind.LPAREN} or end of statement")
            raise self.error("end of statement")
        return Selection(selector=selector_t.value, range=rng, attributes=attributes)

    def parse_name_list(self) -> tuple[str, ...]:
        self.expect(TokenKind.LBRACE)
        names = [self.expect(TokenKind.IDENT).value]
        while not self.at(TokenKind.RBRACE):
            if not self.at(TokenKind.COMMA):
                raise self.error(f"{TokenKind.COMMA} or {TokenKind.RBRACE}")
            self.advance()
            names.append(self.expect(TokenKind.IDENT).value)
        self.advance()  # }
        return tuple(names)

    def parse_range(self) -> Range:
        self.expect(TokenKind.LPAREN)
        start = int(self.expect(TokenKind.INTEGER).value)
        if self.at(TokenKind.RPAREN):
            self.advance()
            return Range(start, start)
        if not self.at(TokenKind.COMMA):
            raise self.error(f"{TokenKind.COMMA} or {TokenKind.RPAREN}")
        self.advance()
        if self.at(TokenKind.RPAREN):
            self.advance()
            return Range(start)
        if not self.at(TokenKind.INTEGER):
            raise self.error(f"{TokenKind.INTEGER} or {TokenKind.RPAREN}")
        end = int(self.advance().value)
        self.expect(TokenKind.RPAREN)
        return Range(start, end)


def parse(source: str, path: Optional[str] = None) -> Program:
    """Parse munge source into a Program AST."""
    parser = Parser(Lexer(source, path), path)
    return parser.parse_program()

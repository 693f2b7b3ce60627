"""
Monkeyfront Parser - Recognizes statements from the token stream

The parser pulls tokens from its own Lexer one at a time and matches them
against a fixed production. A mismatch never raises: it is recorded in the
DiagnosticSink and the call returns None. Tokens already pulled are not
pushed back, so a broken statement can throw the following calls off until
the stream reaches the next `let`.

Statement forms:
    - let <identifier> = <integer | string> ;

AST Node Types:
    - Statement: a let binding
    - Literal: an integer or string literal token
    - FunctionBody: a list of statements (no production builds this yet)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .diagnostics import DiagnosticSink
from .lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Literal:
    """Literal value: an INTEGER or STRING token"""
    token: Token


@dataclass
class FunctionBody:
    """Statement list of a function literal"""
    statements: List["Statement"] = field(default_factory=list)


Expr = Union[Literal, FunctionBody]


@dataclass
class Statement:
    """Let binding: let ident = value;"""
    ident: Token
    value: Expr


LITERAL_KINDS = (TokenKind.INTEGER, TokenKind.STRING)


class Parser:
    """
    Parser for one source buffer

    Owns a Lexer and a DiagnosticSink and nothing else; every call to
    next() starts wherever the lexer cursor was left. Once the session is
    released (release() or leaving a `with` block) next() raises
    RuntimeError on every call.
    """

    def __init__(self, source, sink: Optional[DiagnosticSink] = None):
        """
        Initialize the parser with source code

        Args:
            source: Source bytes, or text scanned as UTF-8
            sink: Diagnostic sink to report into; a fresh one by default
        """
        self.lexer = Lexer(source)
        self.diagnostics = sink if sink is not None else DiagnosticSink()

    @property
    def source(self) -> bytes:
        return self.lexer.source

    def __enter__(self) -> "Parser":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def release(self) -> None:
        self.diagnostics.release()

    def write_errors(self, writer) -> None:
        """Write all diagnostics so far, one per line"""
        self.diagnostics.drain_into(writer)

    def next(self) -> Optional[Statement]:
        """
        Parse the next statement

        Returns:
            The Statement, or None when a diagnostic was recorded instead.
            None does not mean end of input.
        """
        if self.diagnostics.released:
            raise RuntimeError("parser used after its session was released")
        token = self.lexer.next()
        if token.kind is TokenKind.LET:
            return self.parse_let()
        self.expect_any(token, (TokenKind.LET,))
        return None

    def parse_let(self) -> Optional[Statement]:
        """Parse: let ident = literal; (the 'let' is already consumed)"""
        ident = self.lexer.next()
        if not self.expect_any(ident, (TokenKind.IDENTIFIER,)):
            return None

        assign = self.lexer.next()
        if not self.expect_any(assign, (TokenKind.ASSIGN,)):
            return None

        value = self.lexer.next()
        if not self.expect_any(value, LITERAL_KINDS):
            return None

        semicolon = self.lexer.next()
        if not self.expect_any(semicolon, (TokenKind.SEMICOLON,)):
            return None

        return Statement(ident=ident, value=Literal(value))

    def expect_any(self, got: Token, want: Sequence[TokenKind]) -> bool:
        """Check `got` against the accepted kinds, reporting a mismatch"""
        if got.kind in want:
            return True

        pos = got.line_col(self.source)
        expected = " or ".join(kind.describe() for kind in want)
        self.diagnostics.report(
            "expected {} but got {} at {}:{}", expected, got.kind.describe(), pos.line, pos.col
        )
        logger.debug("diagnostic at offset %d: expected %s, got %s",
                     got.span.start, expected, got.kind.name)
        return False

"""
Monkeyfront session driver.

Runs a Parser over a whole source buffer:
- Tokenizing (reported at DEBUG with the token count)
- Parsing statements until the lexer has no more tokens
- Collecting diagnostics and releasing the session's sink

Usage:
    result = parse_source('let a = 1;')
    if not result.ok:
        result.write_errors(sys.stderr)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .diagnostics import ParseError, write_lines
from .lexer import TokenKind
from .parser import Parser, Statement

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Statements recognized and diagnostics recorded by one session."""
    statements: List[Statement] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def write_errors(self, writer) -> None:
        write_lines(writer, self.diagnostics)


def parse_source(source, *, strict: bool = False, limit: Optional[int] = None) -> ParseResult:
    """
    Parse every statement in `source`.

    Parser.next() returns None both for a diagnostic and at end of input,
    so the loop asks the lexer whether another token remains before each call.

    Args:
        source: Source bytes, or text scanned as UTF-8
        strict: Raise ParseError instead of returning when diagnostics exist
        limit: Maximum number of Parser.next() calls

    Returns:
        ParseResult with statements and diagnostics in source order

    Raises:
        ParseError: In strict mode, if any diagnostic was recorded
    """
    statements: List[Statement] = []
    calls = 0
    with Parser(source) as parser:
        logger.info("Parsing %d bytes...", len(parser.source))
        while parser.lexer.peek().kind is not TokenKind.END_OF_INPUT:
            if limit is not None and calls >= limit:
                logger.info("Stopped after %d parse calls", calls)
                break
            statement = parser.next()
            calls += 1
            if statement is not None:
                statements.append(statement)
        diagnostics = list(parser.diagnostics.messages)
        logger.debug("%d parse calls stopped at byte %d", calls, parser.lexer.offset)

    logger.info("Parsed %d statements with %d diagnostics", len(statements), len(diagnostics))

    if strict and diagnostics:
        raise ParseError(diagnostics)
    return ParseResult(statements=statements, diagnostics=diagnostics)

"""
Monkeyfront - Scanner and statement parser for a small scripting language

This package is the front end of the language toolchain.
It consists of several modules:
- lexer: Scans source text into spans and tokens
- diagnostics: Collects parse diagnostics for a session
- parser: Recognizes let statements from the token stream
- frontend: Runs a whole parsing session over a source buffer

Usage:
    from monkeyfront import parse_source
    result = parse_source('let a = "hello world";')
"""

from .lexer import (
    FilePos,
    Lexer,
    Span,
    SpanError,
    Token,
    TokenKind,
    scan_token,
    tokenize,
)
from .diagnostics import DiagnosticSink, ParseError
from .parser import FunctionBody, Literal, Parser, Statement
from .frontend import ParseResult, parse_source

__version__ = "0.1.0"

__all__ = [
    "DiagnosticSink",
    "FilePos",
    "FunctionBody",
    "Lexer",
    "Literal",
    "ParseError",
    "ParseResult",
    "Parser",
    "Span",
    "SpanError",
    "Statement",
    "Token",
    "TokenKind",
    "parse_source",
    "scan_token",
    "tokenize",
]

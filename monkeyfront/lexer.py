"""
Monkeyfront Lexer - Scans source text into a stream of classified tokens

The lexer is a cursor over an immutable byte buffer. Tokens never copy
their lexeme; each one carries a Span (a half-open offset range) that can
be resolved against the source at any time. Text is scanned as UTF-8.

Token Kinds:
    Keywords: let, fn, if, else, return, true, false, nil, for
    Literals: INTEGER, STRING
    Identifiers: every other word-shaped lexeme
    Operators: +, -, *, /, %, !, =, ==, !=, <, >, <=, >=
    Punctuation: (, ), {, }, [, ], ;, ,, ., :
    Special: ILLEGAL (unterminated string), END_OF_INPUT
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple, Union


class SpanError(ValueError):
    """A span that does not fit the buffer it is applied to."""


class TokenKind(Enum):
    """Lexical category of a token. The value is the kind's display label."""

    ILLEGAL = "illegal"
    END_OF_INPUT = "end of input"

    # Identifiers & literals
    IDENTIFIER = "identifier"
    INTEGER = "integer"
    STRING = "string"  # lexeme includes both quotes

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    BANG = "!"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    # Delimiters
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    SEMICOLON = ";"
    COMMA = ","
    DOT = "."
    COLON = ":"

    # Keywords
    FUNC = "fn"
    LET = "let"
    IF = "if"
    ELSE = "else"
    RETURN = "return"
    TRUE = "true"
    FALSE = "false"
    NIL = "nil"
    FOR = "for"

    def describe(self) -> str:
        """Label used in diagnostics: quoted lexeme for symbols and keywords."""
        if self in _WORD_KINDS:
            return self.value
        return f"'{self.value}'"


_WORD_KINDS = frozenset({
    TokenKind.ILLEGAL,
    TokenKind.END_OF_INPUT,
    TokenKind.IDENTIFIER,
    TokenKind.INTEGER,
    TokenKind.STRING,
})

# Reserved words
KEYWORDS = {
    b'let': TokenKind.LET,
    b'fn': TokenKind.FUNC,
    b'if': TokenKind.IF,
    b'else': TokenKind.ELSE,
    b'return': TokenKind.RETURN,
    b'true': TokenKind.TRUE,
    b'false': TokenKind.FALSE,
    b'nil': TokenKind.NIL,
    b'for': TokenKind.FOR,
}

# Characters that always form a one-character token
SINGLE_CHAR_TOKENS = {
    b'(': TokenKind.LPAREN,
    b')': TokenKind.RPAREN,
    b'{': TokenKind.LBRACE,
    b'}': TokenKind.RBRACE,
    b'[': TokenKind.LBRACKET,
    b']': TokenKind.RBRACKET,
    b';': TokenKind.SEMICOLON,
    b',': TokenKind.COMMA,
    b'.': TokenKind.DOT,
    b':': TokenKind.COLON,
    b'+': TokenKind.PLUS,
    b'-': TokenKind.MINUS,
    b'*': TokenKind.STAR,
    b'/': TokenKind.SLASH,
    b'%': TokenKind.PERCENT,
}

# First character -> (kind alone, kind when followed by '=')
LOOKAHEAD_TOKENS = {
    b'=': (TokenKind.ASSIGN, TokenKind.EQUAL),
    b'<': (TokenKind.LESS, TokenKind.LESS_EQUAL),
    b'>': (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
    b'!': (TokenKind.BANG, TokenKind.NOT_EQUAL),
}

WHITESPACE = b" \t\r\n"
DIGITS = b"0123456789"
# Word scanning stops at these. '-', '*', '/', '%', '<', '>' and '!' are not
# here, so they are absorbed into a word they directly follow.
WORD_DELIMITERS = WHITESPACE + b";(){}[],.:+="


class FilePos(NamedTuple):
    """One-indexed line and column of a source offset."""
    line: int = 1
    col: int = 1


def as_buffer(source: Union[str, bytes, bytearray]) -> bytes:
    """The byte buffer offsets refer to: UTF-8 for text, the bytes themselves otherwise."""
    if isinstance(source, str):
        return source.encode('utf-8')
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    raise TypeError(f"source must be str or bytes, not {type(source).__name__}")


@dataclass(frozen=True)
class Span:
    """Half-open range [start, end) of byte offsets into the source."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise SpanError(f"invalid span [{self.start}, {self.end})")

    @classmethod
    def fixed(cls, start: int, width: int = 1) -> "Span":
        """Span of a fixed-width token (operators and punctuation)."""
        return cls(start, start + width)

    @property
    def width(self) -> int:
        return self.end - self.start

    def _check(self, buffer: bytes):
        if self.end > len(buffer):
            raise SpanError(
                f"span [{self.start}, {self.end}) exceeds source of length {len(buffer)}"
            )

    def text(self, source):
        """
        The lexeme this span denotes in `source`.

        Bytes in, bytes out. For a str source the span is applied to its
        UTF-8 encoding and the lexeme is decoded back to str.
        """
        buffer = as_buffer(source)
        self._check(buffer)
        lexeme = buffer[self.start:self.end]
        if isinstance(source, str):
            return lexeme.decode('utf-8', errors='replace')
        return lexeme

    def line_col(self, source) -> FilePos:
        """
        Resolve the start of the span to a line and column

        Args:
            source: The buffer (or text) the span was scanned from

        Returns:
            FilePos with 1-indexed line and byte column
        """
        buffer = as_buffer(source)
        self._check(buffer)
        line = buffer.count(b'\n', 0, self.start) + 1
        col = self.start - buffer.rfind(b'\n', 0, self.start)
        return FilePos(line, col)


@dataclass(frozen=True)
class Token:
    """A token kind paired with the span of its lexeme"""
    kind: TokenKind
    span: Span

    def text(self, source):
        return self.span.text(source)

    def line_col(self, source) -> FilePos:
        return self.span.line_col(source)


def contains_only_any_of(haystack, needles) -> bool:
    """True when every element of `haystack` is one of `needles`."""
    for char in haystack:
        if char not in needles:
            return False
    return True


def scan_token(source, offset: int = 0) -> Token:
    """
    Scan one token starting at byte `offset`

    Leading whitespace is skipped. Scanning at or past the end of the source
    yields a zero-width END_OF_INPUT token.

    Args:
        source: Source bytes, or text to be scanned as UTF-8
        offset: Position to start scanning from

    Returns:
        The scanned Token; its span end is where the next scan resumes
    """
    buffer = as_buffer(source)
    length = len(buffer)
    while offset < length and buffer[offset:offset + 1] in WHITESPACE:
        offset += 1

    if offset >= length:
        return Token(TokenKind.END_OF_INPUT, Span(offset, offset))

    char = buffer[offset:offset + 1]

    if char in SINGLE_CHAR_TOKENS:
        return Token(SINGLE_CHAR_TOKENS[char], Span.fixed(offset))

    if char in LOOKAHEAD_TOKENS:
        simple, compound = LOOKAHEAD_TOKENS[char]
        if buffer[offset + 1:offset + 2] == b'=':
            return Token(compound, Span.fixed(offset, 2))
        return Token(simple, Span.fixed(offset))

    if char == b'"':
        # A quote directly after a backslash does not close the literal
        i = offset + 1
        while i < length and (buffer[i:i + 1] != b'"' or buffer[i - 1:i] == b'\\'):
            i += 1
        if i == length:
            return Token(TokenKind.ILLEGAL, Span(offset, length))
        return Token(TokenKind.STRING, Span(offset, i + 1))

    end = offset
    while end < length and buffer[end:end + 1] not in WORD_DELIMITERS:
        end += 1
    word = buffer[offset:end]

    if word in KEYWORDS:
        kind = KEYWORDS[word]
    elif contains_only_any_of(word, DIGITS):
        kind = TokenKind.INTEGER
    else:
        kind = TokenKind.IDENTIFIER
    return Token(kind, Span(offset, end))


class Lexer:
    """
    Lexical analyzer over a borrowed source buffer

    Each call to next() returns exactly one token. Once the input is
    exhausted every further call returns a zero-width END_OF_INPUT token
    at the end of the source. Offsets are byte offsets; text input is
    scanned as its UTF-8 encoding.
    """

    def __init__(self, source):
        """
        Initialize the lexer with source code

        Args:
            source: Source bytes, or text (encoded to UTF-8 once here)
        """
        self.source = as_buffer(source)
        self.offset = 0

    def next(self) -> Token:
        """Scan the next token and move the cursor past it"""
        token = scan_token(self.source, self.offset)
        self.offset = token.span.end
        return token

    def peek(self) -> Token:
        """The token next() would return, without moving the cursor"""
        return scan_token(self.source, self.offset)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token.kind is TokenKind.END_OF_INPUT:
                return
            yield token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source

        Returns:
            All remaining tokens, ending with one END_OF_INPUT token
        """
        tokens = []
        while True:
            token = self.next()
            tokens.append(token)
            if token.kind is TokenKind.END_OF_INPUT:
                break
        return tokens


def tokenize(source) -> List[Token]:
    """
    Convenience function to tokenize source code

    Args:
        source: Source bytes or text

    Returns:
        List of tokens
    """
    lexer = Lexer(source)
    return lexer.tokenize()

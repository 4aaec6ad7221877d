# Tokenizer.py
"""
Lexer for arithmetic expressions.

next_token() reads exactly one token starting at a Cursor and returns it
together with the advanced cursor; tokenize() drives it lazily until END.
Positions: offsets are 0-based, line and column are 1-based.
"""

import logging
from collections import namedtuple
from enum import Enum

from . import error as E

logger = logging.getLogger(__name__)

FUNCTION_NAMES = ("sin", "cos", "tan", "log", "ln", "sqrt")
CONSTANT_NAMES = ("pi", "e", "phi", "π", "φ")
WHITESPACE = " \t\r\n"
DIGITS = "0123456789"


class TokenKind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    BANG = "!"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    FUNCTION = "function"
    CONSTANT = "constant"
    END = "end"


SINGLE_CHARACTER_TOKENS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "!": TokenKind.BANG,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


class SourceSpan(namedtuple("SourceSpan", "start end line column")):
    """Inclusive [start, end] offsets plus the line/column of start."""
    __slots__ = ()

    def merge(self, other):
        first = self if self.start <= other.start else other
        return SourceSpan(first.start, max(self.end, other.end), first.line, first.column)


Token = namedtuple("Token", "kind text span")
Cursor = namedtuple("Cursor", "offset line column")

START = Cursor(0, 1, 1)


def _advance(text, cursor):
    if text[cursor.offset] == "\n":
        return Cursor(cursor.offset + 1, cursor.line + 1, 1)
    return Cursor(cursor.offset + 1, cursor.line, cursor.column + 1)


def _peek(text, cursor):
    if cursor.offset < len(text):
        return text[cursor.offset]
    return ""


def _is_digit(char):
    return char != "" and char in DIGITS


def _is_identifier_start(char):
    return char.isalpha() or char == "_"


def _is_identifier_part(char):
    return char.isalnum() or char == "_"


def skip_whitespace(text, cursor):
    while _peek(text, cursor) and _peek(text, cursor) in WHITESPACE:
        cursor = _advance(text, cursor)
    return cursor


def next_token(text, cursor=START):
    """Read one token at cursor. Returns (token, cursor_after_token)."""
    cursor = skip_whitespace(text, cursor)
    start = cursor
    current = _peek(text, cursor)

    # --- End of input (stays at END on repeated calls) ---
    if current == "":
        span = SourceSpan(start.offset, start.offset, start.line, start.column)
        return Token(TokenKind.END, "", span), cursor

    # --- Numbers: digits with at most one decimal point ---
    if _is_digit(current) or current == ".":
        has_decimal_point = False
        while _is_digit(_peek(text, cursor)) or (_peek(text, cursor) == "." and not has_decimal_point):
            if _peek(text, cursor) == ".":
                has_decimal_point = True
            cursor = _advance(text, cursor)

        value = text[start.offset:cursor.offset]
        span = SourceSpan(start.offset, cursor.offset - 1, start.line, start.column)
        if value == ".":
            raise E.LexError("Unexpected character: '.'", kind=E.ErrorKind.UNEXPECTED_CHARACTER, span=span)
        return Token(TokenKind.NUMBER, value, span), cursor

    # --- Identifiers: functions, constants, variable names ---
    if _is_identifier_start(current):
        while _is_identifier_part(_peek(text, cursor)):
            cursor = _advance(text, cursor)

        value = text[start.offset:cursor.offset]
        span = SourceSpan(start.offset, cursor.offset - 1, start.line, start.column)
        if value in FUNCTION_NAMES:
            kind = TokenKind.FUNCTION
        elif value in CONSTANT_NAMES:
            kind = TokenKind.CONSTANT
        else:
            kind = TokenKind.IDENTIFIER
        return Token(kind, value, span), cursor

    # --- Operators and punctuation ---
    span = SourceSpan(start.offset, start.offset, start.line, start.column)
    kind = SINGLE_CHARACTER_TOKENS.get(current)
    if kind is None:
        raise E.LexError(f"Unexpected character: {current!r}",
                         kind=E.ErrorKind.UNEXPECTED_CHARACTER, span=span)
    return Token(kind, current, span), _advance(text, cursor)


def tokenize(text):
    """Yield the tokens of text, ending with (and including) a single END token."""
    cursor = START
    while True:
        token, cursor = next_token(text, cursor)
        logger.debug("token %s %r at %d", token.kind.name, token.text, token.span.start)
        yield token
        if token.kind == TokenKind.END:
            return

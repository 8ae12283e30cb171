"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Content
    IDENTIFIER = auto()  # [A-Za-z0-9]+ (names, numbers and keywords alike)

    # Structural (single-character)
    EQUALS = auto()  # =
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    BACKSLASH = auto()  # \

    # Node terminators
    SEMICOLON = auto()  # ;
    END_OF_LINE = auto()  # run of \r / \n, CRLF and blank lines collapse

    ILLEGAL = auto()  # any character with no token class


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token and the source text it covers."""

    type: TokenType
    value: str


PUNCTUATION: dict[str, TokenType] = {
    "=": TokenType.EQUALS,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "\\": TokenType.BACKSLASH,
    ";": TokenType.SEMICOLON,
}

TERMINATORS: frozenset[TokenType] = frozenset({TokenType.SEMICOLON, TokenType.END_OF_LINE})

_WHITESPACE = frozenset(" \t\v\f")
_END_OF_LINE = frozenset("\r\n")


def is_word_char(ch: str) -> bool:
    """Return True if ch is an ASCII letter or digit."""
    return ch.isascii() and ch.isalnum()


def is_whitespace(ch: str) -> bool:
    """Return True for horizontal whitespace (line breaks excluded)."""
    return ch in _WHITESPACE


def is_end_of_line(ch: str) -> bool:
    return ch in _END_OF_LINE

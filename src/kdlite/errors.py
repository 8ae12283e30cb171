"""Error types with formatted token context."""

from __future__ import annotations

from collections.abc import Sequence

from kdlite.tokens import Token, TokenType


class ParseError(Exception):
    """Raised on the first syntax error, with the offending token index.

    ``index`` points into ``tokens``; it equals ``len(tokens)`` when the
    error is at end of input.
    """

    def __init__(self, message: str, index: int, tokens: Sequence[Token]) -> None:
        self.message = message
        self.index = index
        self.tokens = tuple(tokens)
        super().__init__(self.format())

    def format(self, filename: str = "input.kdl") -> str:
        # There are no source positions, so rebuild the logical line around
        # the token from the token texts themselves.
        start = self.index
        while start > 0 and self.tokens[start - 1].type != TokenType.END_OF_LINE:
            start -= 1
        end = self.index
        while end < len(self.tokens) and self.tokens[end].type != TokenType.END_OF_LINE:
            end += 1

        parts: list[str] = []
        col = 0
        width = 1
        for i in range(start, end):
            text = self.tokens[i].value
            if i == self.index:
                col = sum(len(p) + 1 for p in parts)
                width = max(1, len(text))
            parts.append(text)
        if self.index >= end:
            col = sum(len(p) + 1 for p in parts)
        source_line = " ".join(parts)

        pad = " " * col
        carets = "^" * width

        return (
            f"error: {self.message}\n"
            f"  --> {filename}, token {self.index}\n"
            f"   |\n"
            f"   | {source_line}\n"
            f"   | {pad}{carets}"
        )


class LexError(ParseError):
    """Raised when the token stream holds a character the lexer could not classify."""


class UnknownTokenError(ParseError):
    """Raised when a parser state meets a token type it has no rule for."""

"""kdlite lexer — converts source text into a flat token stream."""

from __future__ import annotations

from kdlite.tokens import (
    PUNCTUATION,
    Token,
    TokenType,
    is_end_of_line,
    is_whitespace,
    is_word_char,
)


class Lexer:
    """Tokenize kdlite source text into a list of Token objects.

    The lexer never raises. Characters without a token class come out as
    ILLEGAL tokens and the parser decides what to do with them.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while True:
            self._skip_whitespace()
            if self._pos >= len(self._source):
                break
            self._lex_one()
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _emit(self, tt: TokenType, start: int) -> Token:
        tok = Token(tt, self._source[start : self._pos])
        self._tokens.append(tok)
        return tok

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and is_whitespace(self._peek()):
            self._pos += 1

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _lex_one(self) -> None:
        ch = self._peek()
        start = self._pos

        if is_word_char(ch):
            self._lex_word()
            return

        if is_end_of_line(ch):
            self._lex_end_of_line()
            return

        self._pos += 1
        tt = PUNCTUATION.get(ch)
        if tt is None:
            self._emit(TokenType.ILLEGAL, start)
        else:
            self._emit(tt, start)

    def _lex_word(self) -> None:
        start = self._pos
        while self._pos < len(self._source) and is_word_char(self._peek()):
            self._pos += 1
        self._emit(TokenType.IDENTIFIER, start)

    def _lex_end_of_line(self) -> None:
        # Blank lines and CRLF pairs all fold into a single END_OF_LINE
        start = self._pos
        while self._pos < len(self._source) and is_end_of_line(self._peek()):
            self._pos += 1
        self._emit(TokenType.END_OF_LINE, start)


def lex(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()

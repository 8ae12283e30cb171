"""kdlite: lexer and parser for a small KDL-like document language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kdlite.ast import Node

__version__ = "0.1.0"


def loads(source: str) -> tuple[Node, ...]:
    """Lex and parse kdlite source text into its top-level nodes."""
    from kdlite.lexer import lex
    from kdlite.parser import parse

    return parse(lex(source))

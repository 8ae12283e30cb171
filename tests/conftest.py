"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from kdlite.ast import Node
from kdlite.lexer import lex
from kdlite.parser import parse_source
from kdlite.tokens import PUNCTUATION, Token, TokenType


@pytest.fixture
def lex_source():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return lex(source)

    return _lex


@pytest.fixture
def parse_nodes():
    """Return a helper that lexes and parses source into top-level nodes."""

    def _parse(source: str) -> tuple[Node, ...]:
        return parse_source(source)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def ident(text: str) -> Token:
    return Token(TokenType.IDENTIFIER, text)


def punct(ch: str) -> Token:
    return Token(PUNCTUATION[ch], ch)


def eol(raw: str = "\n") -> Token:
    return Token(TokenType.END_OF_LINE, raw)


def assert_node(
    node: Node,
    name: str,
    num_entries: int = 0,
    has_children: bool = False,
) -> None:
    """Assert basic properties of a Node."""
    assert isinstance(node, Node), f"Expected Node, got {type(node).__name__}"
    assert node.name == name, f"Expected name '{name}', got '{node.name}'"
    entries = node.props_args or ()
    assert len(entries) == num_entries, f"Expected {num_entries} entries, got {len(entries)}"
    if has_children:
        assert node.children is not None, "Expected children, got None"
    else:
        assert node.children is None, f"Expected no children, got {node.children}"

"""Human-readable token and node tree dumps."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from kdlite.ast import Node, NodePropArg, Property, Value
from kdlite.tokens import Token, TokenType


def dump_tokens(tokens: Sequence[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line to *file*."""
    for tok in tokens:
        if tok.type == TokenType.END_OF_LINE:
            file.write(f"{tok.type.name}\n")
        else:
            file.write(f"{tok.type.name} {tok.value!r}\n")


def dump_nodes(nodes: Sequence[Node], *, file: TextIO = sys.stderr, indent: int = 2) -> None:
    """Print a human-readable node tree to *file*."""
    for node in nodes:
        _dump_node(node, 0, indent, file)


def _prefix(depth: int, indent: int) -> str:
    return " " * (depth * indent)


def _dump_node(node: Node, depth: int, indent: int, f: TextIO) -> None:
    annotation = f" ({node.type.value})" if node.type is not None else ""
    f.write(f"{_prefix(depth, indent)}Node {node.name}{annotation}\n")
    for entry in node.props_args or ():
        _dump_entry(entry, depth + 1, indent, f)
    if node.children is not None:
        if not node.children:
            f.write(f"{_prefix(depth + 1, indent)}{{}}\n")
        for child in node.children:
            _dump_node(child, depth + 1, indent, f)


def _dump_entry(entry: NodePropArg, depth: int, indent: int, f: TextIO) -> None:
    annotation = f"({entry.type.value})" if entry.type is not None else ""
    if isinstance(entry, Property):
        f.write(f"{_prefix(depth, indent)}Property {entry.key}={annotation}{entry.value!r}\n")
    elif isinstance(entry, Value):
        f.write(f"{_prefix(depth, indent)}Value {annotation}{entry.value!r}\n")

"""kdlite parser — converts a token stream into a tuple of Node trees."""

from __future__ import annotations

from collections.abc import Sequence

from kdlite.ast import Node, NodePropArg, NodeType, Property, Value
from kdlite.errors import LexError, ParseError, UnknownTokenError
from kdlite.lexer import lex
from kdlite.tokens import TERMINATORS, Token, TokenType

# Each block level costs two stack frames; keep well inside the default
# recursion limit.
MAX_NESTING = 200


class Parser:
    """Recursive descent parser for kdlite token streams.

    Grammar, informally::

        nodes      := (terminator* node)* terminator*
        node       := annotation? IDENTIFIER entry* children? terminator
        entry      := annotation? (IDENTIFIER '=' annotation? IDENTIFIER | IDENTIFIER)
        annotation := '(' IDENTIFIER ')'
        children   := '{' nodes '}'
        terminator := ';' | END_OF_LINE | EOF | (before a closing '}')

    ``\\`` directly followed by END_OF_LINE is a line continuation and is
    skipped wherever an entry or a child block may follow.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tuple(tokens)
        self._pos = 0
        self._depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return None

    def _peek_types(self, n: int) -> tuple[TokenType, ...] | None:
        """Types of the next *n* tokens starting at the current one."""
        if self._pos + n > len(self._tokens):
            return None
        return tuple(t.type for t in self._tokens[self._pos : self._pos + n])

    def _at(self, *types: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type in types

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _expect(self, tt: TokenType, message: str) -> Token:
        if not self._at(tt):
            raise self._error(message)
        return self._advance()

    def _error(self, message: str, index: int | None = None) -> ParseError:
        if index is None:
            index = self._pos
        return ParseError(message, index, self._tokens)

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> tuple[Node, ...]:
        for i, tok in enumerate(self._tokens):
            if tok.type == TokenType.ILLEGAL:
                raise LexError(f"illegal character {tok.value!r}", i, self._tokens)

        self._pos = 0
        self._depth = 0
        return self._parse_nodes(nested=False)

    def _parse_nodes(self, nested: bool) -> tuple[Node, ...]:
        nodes: list[Node] = []
        open_index = self._pos - 1

        while True:
            self._skip_separators()

            if self._at_end():
                if nested:
                    raise self._error(
                        f"unterminated child block (opened at token {open_index})"
                    )
                break

            tok = self._peek()
            assert tok is not None

            if tok.type in (TokenType.IDENTIFIER, TokenType.LPAREN):
                nodes.append(self._parse_node(nested))
            elif tok.type == TokenType.RBRACE:
                if not nested:
                    raise self._error("unexpected '}' with no open child block")
                self._advance()
                break
            elif tok.type in (TokenType.EQUALS, TokenType.RPAREN, TokenType.LBRACE):
                raise self._error(f"expected node name, found {tok.value!r}")
            elif tok.type == TokenType.BACKSLASH:
                raise self._error("expected line break after '\\'", self._pos + 1)
            else:
                raise UnknownTokenError(
                    f"no rule for token {tok.type.name} at node start", self._pos, self._tokens
                )

        return tuple(nodes)

    def _skip_separators(self) -> None:
        """Skip terminators and line continuations between nodes."""
        while True:
            if self._at(*TERMINATORS):
                self._advance()
            elif self._at_continuation():
                self._pos += 2
            else:
                return

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _parse_node(self, nested: bool) -> Node:
        node_type: NodeType | None = None
        if self._at(TokenType.LPAREN):
            node_type = self._parse_type_annotation()

        name_tok = self._expect(TokenType.IDENTIFIER, "expected node name")

        entries = self._parse_props_args()
        props_args = tuple(entries) if entries else None

        children: tuple[Node, ...] | None = None
        if self._at(TokenType.LBRACE):
            if self._depth >= MAX_NESTING:
                raise self._error(f"child blocks nested too deeply (limit {MAX_NESTING})")
            self._advance()  # consume LBRACE
            self._depth += 1
            children = self._parse_nodes(nested=True)
            self._depth -= 1
            self._skip_continuations()

        self._parse_terminator(nested)
        return Node(name_tok.value, node_type, props_args, children)

    def _parse_terminator(self, nested: bool) -> None:
        if self._at_end():
            return
        if self._at(*TERMINATORS):
            self._advance()
            return
        if self._at(TokenType.RBRACE):
            if not nested:
                raise self._error("unexpected '}' with no open child block")
            # Left in place; it closes the enclosing block.
            return
        if self._at(TokenType.BACKSLASH):
            raise self._error("expected line break after '\\'", self._pos + 1)

        tok = self._peek()
        assert tok is not None
        raise self._error(f"expected ';' or line break after node, found {tok.value!r}")

    # ------------------------------------------------------------------
    # Arguments and properties
    # ------------------------------------------------------------------

    def _parse_props_args(self) -> list[NodePropArg]:
        """Collect entries until a token that cannot start one."""
        entries: list[NodePropArg] = []

        while True:
            self._skip_continuations()

            annotation: NodeType | None = None
            if self._at(TokenType.LPAREN):
                annotation = self._parse_type_annotation()
                if not self._at(TokenType.IDENTIFIER):
                    raise self._error("expected argument or property after type annotation")
            elif not self._at(TokenType.IDENTIFIER):
                break

            if self._peek_types(2) == (TokenType.IDENTIFIER, TokenType.EQUALS):
                entries.append(self._parse_property(annotation))
            else:
                entries.append(Value(self._advance().value, annotation))

        return entries

    def _parse_property(self, annotation: NodeType | None) -> Property:
        key_tok = self._advance()
        self._advance()  # consume EQUALS

        if self._at(TokenType.LPAREN):
            if annotation is not None:
                raise self._error(f"property {key_tok.value!r} already has a type annotation")
            annotation = self._parse_type_annotation()

        value_tok = self._expect(
            TokenType.IDENTIFIER, f"expected value after '{key_tok.value}='"
        )
        return Property(key_tok.value, value_tok.value, annotation)

    # ------------------------------------------------------------------
    # Type annotations
    # ------------------------------------------------------------------

    def _parse_type_annotation(self) -> NodeType:
        self._advance()  # consume LPAREN

        name_tok = self._expect(TokenType.IDENTIFIER, "expected type name after '('")
        name_index = self._pos - 1
        self._expect(TokenType.RPAREN, "expected ')' after type name")

        node_type = NodeType.lookup(name_tok.value)
        if node_type is None:
            raise self._error(f"unknown type annotation {name_tok.value!r}", name_index)
        return node_type

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_continuation(self) -> bool:
        return self._peek_types(2) == (TokenType.BACKSLASH, TokenType.END_OF_LINE)

    def _skip_continuations(self) -> None:
        while self._at_continuation():
            self._pos += 2


def parse(tokens: Sequence[Token]) -> tuple[Node, ...]:
    """Convenience function: parse a token stream and return its top-level nodes."""
    return Parser(tokens).parse()


def parse_source(source: str) -> tuple[Node, ...]:
    """Lex and parse source text in one step."""
    return parse(lex(source))

"""Tests for (type) annotations on nodes, arguments and property values."""

from __future__ import annotations

import pytest

from kdlite.ast import Node, NodeType, Property, Value
from kdlite.errors import ParseError
from kdlite.parser import Parser
from tests.conftest import ident, punct


class TestNodeTypeLookup:
    def test_exact_spelling(self):
        assert NodeType.lookup("u8") is NodeType.U8
        assert NodeType.lookup("dateTime") is NodeType.DATE_TIME
        assert NodeType.lookup("countrySubdivision") is NodeType.COUNTRY_SUBDIVISION

    def test_case_sensitive(self):
        assert NodeType.lookup("U8") is None
        assert NodeType.lookup("datetime") is None

    def test_unknown(self):
        assert NodeType.lookup("u16") is None

    def test_every_member_round_trips(self):
        for member in NodeType:
            assert NodeType.lookup(member.value) is member


class TestAnnotationParsing:
    def test_annotation_alone(self):
        parser = Parser([punct("("), ident("u8"), punct(")")])
        assert parser._parse_type_annotation() is NodeType.U8

    def test_node_annotation(self, parse_nodes):
        (node,) = parse_nodes("(date)published 1970")
        assert node == Node("published", NodeType.DATE, (Value("1970"),))

    def test_argument_annotation(self, parse_nodes):
        (node,) = parse_nodes("node (u8)123")
        assert node.props_args == (Value("123", NodeType.U8),)

    def test_property_value_annotation(self, parse_nodes):
        (node,) = parse_nodes("node pattern=(regex)abc")
        assert node.props_args == (Property("pattern", "abc", NodeType.REGEX),)

    def test_annotation_before_property(self, parse_nodes):
        (node,) = parse_nodes("person (u8)age=5")
        assert node.type is None
        assert node.props_args == (Property("age", "5", NodeType.U8),)

    def test_annotation_is_not_retroactive(self, parse_nodes):
        (node,) = parse_nodes("node a b (i32)c d")
        assert node.props_args == (
            Value("a"),
            Value("b"),
            Value("c", NodeType.I32),
            Value("d"),
        )

    def test_child_node_annotation(self, parse_nodes):
        (node,) = parse_nodes("parent {\n  (uuid)id abc\n}")
        assert node.children[0].type is NodeType.UUID


class TestAnnotationErrors:
    def test_unknown_type_name(self, parse_nodes):
        with pytest.raises(ParseError, match="unknown type annotation 'u7'"):
            parse_nodes("node (u7)5")

    def test_unknown_type_on_node(self, parse_nodes):
        with pytest.raises(ParseError, match="unknown type annotation 'thing'"):
            parse_nodes("(thing)node")

    def test_error_points_at_type_name(self, parse_nodes):
        with pytest.raises(ParseError) as exc_info:
            parse_nodes("node (u7)5")
        assert exc_info.value.index == 2

    def test_missing_rparen(self, parse_nodes):
        with pytest.raises(ParseError, match="expected '\\)' after type name"):
            parse_nodes("node (u8 5")

    def test_missing_type_name(self, parse_nodes):
        with pytest.raises(ParseError, match="expected type name after '\\('"):
            parse_nodes("node ()5")

    def test_annotation_at_end_of_input(self, parse_nodes):
        with pytest.raises(ParseError, match="expected '\\)' after type name"):
            parse_nodes("node (u8")

    def test_annotation_without_element(self, parse_nodes):
        with pytest.raises(ParseError, match="expected argument or property"):
            parse_nodes("node (u8)\n")

    def test_annotation_without_node_name(self, parse_nodes):
        with pytest.raises(ParseError, match="expected node name"):
            parse_nodes("(u8)")

    def test_two_annotations_on_property(self, parse_nodes):
        with pytest.raises(ParseError, match="already has a type annotation"):
            parse_nodes("node (u8)age=(i8)5")

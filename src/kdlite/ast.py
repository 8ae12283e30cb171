"""Node types for parsed kdlite documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeType(Enum):
    """Closed set of type annotations, valued by their exact spelling.

    Used as in ``node (u8)123``, ``node pattern=(regex)abc`` or
    ``(date)published 1970``.
    """

    ISIZE = "isize"
    USIZE = "usize"
    I8 = "i8"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    DECIMAL32 = "decimal32"
    DECIMAL64 = "decimal64"

    # Special string types
    DATE_TIME = "dateTime"
    TIME = "time"
    DATE = "date"
    DURATION = "duration"
    DECIMAL = "decimal"
    CURRENCY = "currency"
    COUNTRY2 = "country2"
    COUNTRY3 = "country3"
    COUNTRY_SUBDIVISION = "countrySubdivision"
    EMAIL = "email"
    IDN_EMAIL = "idnEmail"
    HOSTNAME = "hostname"
    IDN_HOSTNAME = "idnHostname"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    URL = "url"
    URL_REFERENCE = "urlReference"
    IRL = "irl"
    IRL_REFERENCE = "irlReference"
    URL_TEMPLATE = "urlTemplate"
    UUID = "uuid"
    REGEX = "regex"
    BASE64 = "base64"

    @classmethod
    def lookup(cls, text: str) -> NodeType | None:
        """Return the member spelled exactly *text*, or None."""
        try:
            return cls(text)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Value:
    """Positional argument."""

    value: str
    type: NodeType | None = None


@dataclass(frozen=True, slots=True)
class Property:
    """Keyed entry: key=value. The annotation, if any, types the value."""

    key: str
    value: str
    type: NodeType | None = None


NodePropArg = Value | Property


@dataclass(frozen=True, slots=True)
class Node:
    """One declaration: name, optional annotation, entries and child block.

    ``props_args`` is None when the node has no entries. ``children`` is
    None when there is no block at all and ``()`` for an empty ``{}``.
    """

    name: str
    type: NodeType | None = None
    props_args: tuple[NodePropArg, ...] | None = None
    children: tuple[Node, ...] | None = None

    def arguments(self) -> tuple[Value, ...]:
        """Positional arguments, in source order."""
        if self.props_args is None:
            return ()
        return tuple(e for e in self.props_args if isinstance(e, Value))

    def properties(self) -> dict[str, Property]:
        """Properties by key; the rightmost duplicate wins."""
        result: dict[str, Property] = {}
        for entry in self.props_args or ():
            if isinstance(entry, Property):
                result[entry.key] = entry
        return result

    def child(self, name: str) -> Node | None:
        """First child called *name*, or None."""
        for node in self.children or ():
            if node.name == name:
                return node
        return None

"""Lenient field coercion and static wire-name tables.

Subsonic servers disagree on how numbers are sent: Airsonic sends ``"id": "1"``
while Navidrome and Gonic send ``"albumCount": 1``, and some send both styles in
one document. Every entity in this package therefore declares a ``WireSchema``:
a static table mapping each canonical attribute to exactly one wire name and a
decoder. All coercion happens in ``WireSchema.decode``; entity code never looks
at raw wire values.

Example:
    >>> schema = WireSchema("genre", [
    ...     text("name", "value"),
    ...     uint("song_count", "songCount"),
    ... ])
    >>> schema.decode({"value": "Rock", "songCount": "12"})
    {'name': 'Rock', 'song_count': 12}
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Sequence

from .exceptions import MalformedFieldError


U64_MAX = 2**64 - 1
U64_DIGITS = len(str(U64_MAX))

MISSING = "<missing>"


def parse_lenient_uint(field: str, value: Any) -> int:
    """Coerce a wire value to an unsigned 64-bit integer.

    Args:
        field: Wire name of the field, used in the error
        value: Native integer or numeric string from the server

    Returns:
        The integer value

    Raises:
        MalformedFieldError: If the value is not a non-negative integer

    Examples:
        >>> parse_lenient_uint("id", "1") == parse_lenient_uint("id", 1)
        True
        >>> parse_lenient_uint("id", "abc")
        Traceback (most recent call last):
        ...
        subdata.exceptions.MalformedFieldError: Malformed field 'id': 'abc'
    """
    # bool is an int subclass; True must not become 1
    if isinstance(value, bool):
        raise MalformedFieldError(field, value)

    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        digits = value.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise MalformedFieldError(field, value)
        # int() refuses very long digit strings with a bare ValueError
        significant = digits.lstrip("0") or "0"
        if len(significant) > U64_DIGITS:
            raise MalformedFieldError(field, value)
        number = int(significant)
    else:
        raise MalformedFieldError(field, value)

    if not 0 <= number <= U64_MAX:
        raise MalformedFieldError(field, value)
    return number


def _decode_uint(wire: str, value: Any) -> int:
    return parse_lenient_uint(wire, value)


def _decode_text(wire: str, value: Any) -> str:
    # Numeric titles ("1984", 21) arrive as JSON numbers from some servers
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedFieldError(wire, value)
    return str(value)


def _decode_flag(wire: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise MalformedFieldError(wire, value)


def _decode_list(wire: str, value: Any, from_json: Callable[[Any], Any]) -> List[Any]:
    # Servers collapse one-element arrays into a bare object
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise MalformedFieldError(wire, value)
    return [from_json(item) for item in value]


def list_of(payload: Any, wire: str, from_json: Callable[[Any], Any]) -> List[Any]:
    """Decode the entity list stored under ``wire`` in a payload object.

    Used for payloads such as ``topSongs`` (``{"song": [...]}``). An absent
    key means an empty list.

    Raises:
        MalformedFieldError: If the payload is not an object or an item fails
    """
    if not isinstance(payload, dict):
        raise MalformedFieldError(wire, payload)
    value = payload.get(wire)
    if value is None:
        return []
    return _decode_list(wire, value, from_json)


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class WireField:
    """One row of a wire table.

    Attributes:
        name: Canonical attribute name on the entity
        wire: Field name in the server's JSON
        decode: Callable (wire_name, raw_value) -> canonical value
        encode: Callable canonical value -> wire value
        optional: Whether the field may be absent on the wire
        default: Value used when an optional field is absent
    """

    name: str
    wire: str
    decode: Callable[[str, Any], Any]
    encode: Callable[[Any], Any] = _identity
    optional: bool = False
    default: Any = None


def uint(name: str, wire: str) -> WireField:
    return WireField(name, wire, _decode_uint)


def optional_uint(name: str, wire: str) -> WireField:
    return WireField(name, wire, _decode_uint, optional=True)


def text(name: str, wire: str) -> WireField:
    return WireField(name, wire, _decode_text)


def optional_text(name: str, wire: str) -> WireField:
    return WireField(name, wire, _decode_text, optional=True)


def flag(name: str, wire: str, default: bool = False) -> WireField:
    return WireField(name, wire, _decode_flag, optional=True, default=default)


def entities(name: str, wire: str, from_json: Callable[[Any], Any]) -> WireField:
    """Nested entity list, decoded to a tuple. Absent means empty."""

    def decode(field: str, value: Any) -> tuple:
        return tuple(_decode_list(field, value, from_json))

    def encode(value: Sequence[Any]) -> List[Dict[str, Any]]:
        return [item.to_json() for item in value]

    return WireField(name, wire, decode, encode, optional=True, default=())


class WireSchema:
    """Total, static mapping between canonical attributes and wire fields.

    Attributes:
        entity: Human-readable entity kind, used in errors
        fields: Ordered WireField rows
    """

    def __init__(self, entity: str, fields: Sequence[WireField]):
        names = [f.name for f in fields]
        wires = [f.wire for f in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"{entity}: duplicate canonical field in {names}")
        if len(set(wires)) != len(wires):
            raise ValueError(f"{entity}: duplicate wire field in {wires}")

        self.entity = entity
        self.fields = tuple(fields)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def wire_name(self, name: str) -> str:
        """Return the wire name for a canonical attribute."""
        for f in self.fields:
            if f.name == name:
                return f.wire
        raise KeyError(name)

    def decode(self, raw: Any) -> Dict[str, Any]:
        """Decode a raw JSON object into canonical attribute values.

        Args:
            raw: JSON object for one entity

        Returns:
            Dict of canonical attribute name to coerced value

        Raises:
            MalformedFieldError: If raw is not an object, a required field is
                missing, or any field fails coercion
        """
        if not isinstance(raw, dict):
            raise MalformedFieldError(self.entity, raw)

        values = {}
        for f in self.fields:
            value = raw.get(f.wire)
            if value is None:
                if not f.optional:
                    raise MalformedFieldError(f.wire, MISSING)
                values[f.name] = f.default
            else:
                values[f.name] = f.decode(f.wire, value)
        return values

    def encode(self, entity: Any) -> Dict[str, Any]:
        """Serialise an entity back to its wire form. None values are omitted."""
        doc = {}
        for f in self.fields:
            value = getattr(entity, f.name)
            if value is not None:
                doc[f.wire] = f.encode(value)
        return doc


class WireEntity:
    """Mixin giving a dataclass ``from_json``/``to_json`` through its schema."""

    SCHEMA: ClassVar[WireSchema]

    @classmethod
    def from_json(cls, raw: Any):
        """Normalise one raw JSON object into an instance of this entity."""
        return cls(**cls.SCHEMA.decode(raw))

    def to_json(self) -> Dict[str, Any]:
        """Serialise to the server's wire format."""
        return self.SCHEMA.encode(self)


def wire_schema(entity: str, fields: Sequence[WireField]):
    """Class decorator attaching a WireSchema to a dataclass.

    The table must name every dataclass field exactly once; a mismatch is
    a programming error raised at import time.
    """
    schema = WireSchema(entity, fields)

    def attach(cls):
        declared = [f.name for f in dataclasses.fields(cls)]
        if sorted(declared) != sorted(schema.names):
            raise TypeError(
                f"{cls.__name__}: wire table {schema.names} does not match fields {declared}"
            )
        cls.SCHEMA = schema
        return cls

    return attach

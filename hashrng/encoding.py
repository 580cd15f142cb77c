from __future__ import annotations

"""
Canonical (injective) encoding of seed values.

Every value is written as

- leaf:      tag(1 byte) || varint(len(payload)) || payload
- container: tag(1 byte) || varint(count) || item || item || ...

with unsigned LEB128 varints. Each encoding is self-delimiting, so no
encoding is a prefix of another and concatenations of encodings stay
unambiguous: ``["ab", "cd"]`` and ``["a", "bcd"]`` never collide.

Tags
- n: None (empty payload)
- o: bool (one byte, 0 or 1)
- i: int (sign byte 0/1 || big-endian magnitude, minimal length)
- b: bytes / bytearray / memoryview (raw)
- s: str (UTF-8)
- l: list / tuple (count, then items)
- m: dict (count, then key/value pairs sorted by encoded key)
- r: record (tag value, field count, then name/value pairs in field order)

Records come from :class:`Struct` (see :func:`inline_struct`) or from
dataclass instances. A dataclass record is tagged with its ``__seed_tag__``
class attribute, or else with ``module.QualName`` of its class, so two
dataclass types with the same fields never collide. Floats and sets are refused: neither has a single canonical
byte form.
"""

import dataclasses
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    TAG_BOOL,
    TAG_BYTES,
    TAG_INT,
    TAG_LIST,
    TAG_MAP,
    TAG_NONE,
    TAG_RECORD,
    TAG_STR,
)
from .errors import SeedEncodingError


def _varint_encode(n: int) -> bytes:
    if n < 0:
        raise ValueError("varint: negative not supported")
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            break
    return bytes(out)


def _leaf(tag: bytes, payload: bytes) -> bytes:
    return tag + _varint_encode(len(payload)) + payload


def _int_payload(n: int) -> bytes:
    sign = b"\x01" if n < 0 else b"\x00"
    mag = -n if n < 0 else n
    # zero has an empty magnitude
    return sign + mag.to_bytes((mag.bit_length() + 7) // 8, "big")


class Struct:
    """Ad-hoc record: an optional tag plus ordered named fields.

    Field order is significant, like the field order of a dataclass.
    """

    __slots__ = ("tag", "fields")

    def __init__(self, tag: Optional[str] = None, /, **fields: Any):
        if tag is not None and not isinstance(tag, str):
            raise TypeError("Struct tag must be a str or None")
        self.tag = tag
        self.fields: Tuple[Tuple[str, Any], ...] = tuple(fields.items())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Struct):
            return NotImplemented
        return self.tag == other.tag and self.fields == other.fields

    def __hash__(self) -> int:
        return hash((self.tag, self.fields))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self.fields)
        return f"Struct({self.tag!r}, {inner})" if inner else f"Struct({self.tag!r})"


def inline_struct(tag: Optional[str] = None, /, **fields: Any) -> Struct:
    return Struct(tag, **fields)


def _record(tag: Optional[str], fields: List[Tuple[str, Any]], out: bytearray, depth: int) -> None:
    out += TAG_RECORD
    _encode(tag, out, depth)
    out += _varint_encode(len(fields))
    for name, value in fields:
        _encode(name, out, depth)
        _encode(value, out, depth)


def _encode(value: Any, out: bytearray, depth: int) -> None:
    if depth > 256:
        raise SeedEncodingError("seed value is nested too deeply")
    depth += 1
    # bool before int: bool is an int subclass
    if value is None:
        out += _leaf(TAG_NONE, b"")
    elif isinstance(value, bool):
        out += _leaf(TAG_BOOL, b"\x01" if value else b"\x00")
    elif isinstance(value, int):
        out += _leaf(TAG_INT, _int_payload(int(value)))
    elif isinstance(value, (bytes, bytearray, memoryview)):
        out += _leaf(TAG_BYTES, bytes(value))
    elif isinstance(value, str):
        try:
            raw = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SeedEncodingError(f"string is not valid UTF-8: {e}") from e
        out += _leaf(TAG_STR, raw)
    elif isinstance(value, (list, tuple)):
        out += TAG_LIST + _varint_encode(len(value))
        for item in value:
            _encode(item, out, depth)
    elif isinstance(value, dict):
        pairs: List[Tuple[bytes, Any]] = []
        for k, v in value.items():
            kb = bytearray()
            _encode(k, kb, depth)
            pairs.append((bytes(kb), v))
        pairs.sort(key=lambda p: p[0])
        out += TAG_MAP + _varint_encode(len(pairs))
        for kb, v in pairs:
            out += kb
            _encode(v, out, depth)
    elif isinstance(value, Struct):
        _record(value.tag, list(value.fields), out, depth)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        cls = type(value)
        # untagged dataclasses are told apart by their qualified class name
        tag = getattr(cls, "__seed_tag__", None) or f"{cls.__module__}.{cls.__qualname__}"
        fields = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
        _record(tag, fields, out, depth)
    else:
        raise SeedEncodingError(f"cannot canonically encode value of type {type(value).__name__}")


def encode_seed(value: Any) -> bytes:
    """Return the canonical byte encoding of ``value``."""
    out = bytearray()
    _encode(value, out, 0)
    return bytes(out)


def encode_fields(fields: Dict[str, Any], tag: Optional[str] = None) -> bytes:
    return encode_seed(Struct(tag, **fields))


__all__ = ["Struct", "inline_struct", "encode_seed", "encode_fields"]

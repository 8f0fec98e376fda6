"""Low-level primitives for the binary bundle format.

Private module; public API is in `binary.py`.

Integers are 4-byte signed little-endian. Strings ("coalesced strings") are
length-prefixed UTF-16LE with a NUL terminator, where the length field counts
code units *including* the terminator and is stored negated:

    ""     -> 00 00 00 00
    "ab"   -> FD FF FF FF  61 00 62 00 00 00     (length -3)

A conforming encoder never writes a positive length; the decoder rejects one.
"""

from __future__ import annotations

import struct

from coalesced.core.errors import FormatError

_INT32 = struct.Struct("<i")
_UNIT = 2  # bytes per UTF-16 code unit
_ENCODING = "utf-16-le"
# Lone surrogates are legal UTF-16 code units; keep them intact both ways.
_ERRORS = "surrogatepass"


def pack_int32(value: int) -> bytes:
    return _INT32.pack(value)


def encode_string(s: str | None) -> bytes:
    """Encode `s` as a coalesced string (length field + UTF-16LE + NUL)."""
    if not s:
        return _INT32.pack(0)
    body = (s + "\0").encode(_ENCODING, errors=_ERRORS)
    # Length is in code units, which differs from len(s) for astral characters.
    units = len(body) // _UNIT
    return _INT32.pack(-units) + body


class ByteReader:
    """Sequential reader over an in-memory buffer with truncation checks."""

    def __init__(self, data: bytes, *, source: str | None = None):
        self._view = memoryview(data)
        self.offset = 0
        self.source = source

    @property
    def remaining(self) -> int:
        return len(self._view) - self.offset

    def error(self, message: str, *, offset: int | None = None) -> FormatError:
        return FormatError(message, source=self.source, offset=self.offset if offset is None else offset)

    def read_bytes(self, n: int) -> bytes:
        if n < 0:
            raise self.error(f"negative byte count {n}")
        if n > self.remaining:
            raise self.error(f"truncated stream: need {n} bytes, {self.remaining} left")
        out = self._view[self.offset : self.offset + n].tobytes()
        self.offset += n
        return out

    def read_int32(self) -> int:
        return _INT32.unpack(self.read_bytes(_INT32.size))[0]

    def read_count(self, what: str) -> int:
        start = self.offset
        n = self.read_int32()
        if n < 0:
            raise self.error(f"negative {what} count {n}", offset=start)
        return n

    def read_string(self) -> str:
        return decode_string(self)


def decode_string(reader: ByteReader) -> str:
    """Decode one coalesced string from `reader`."""
    start = reader.offset
    length = reader.read_int32()
    if length > 0:
        raise reader.error(f"unsupported string length marker {length} (expected <= 0)", offset=start)
    byte_count = length * -_UNIT
    if byte_count == 0:
        return ""
    if byte_count > reader.remaining:
        raise reader.error(
            f"string length {-length} units exceeds remaining {reader.remaining} bytes",
            offset=start,
        )
    raw = reader.read_bytes(byte_count)
    # Drop the NUL terminator unit.
    return raw[:-_UNIT].decode(_ENCODING, errors=_ERRORS)

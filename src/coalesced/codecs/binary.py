"""Binary bundle codec (read + write).

Layout (all integers Int32 little-endian, strings per `_strings.encode_string`):

    file_count
    per file:     name, section_count
    per section:  name, pair_count
    per pair:     key, value

The binary stream does not carry a bundle-level name; callers supply one.
No validation is applied to names, keys or values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from coalesced.codecs._strings import ByteReader, encode_string, pack_int32
from coalesced.core.model import Bundle, BundleFile, Section

logger = logging.getLogger(__name__)


# ----------------------------
# Read
# ----------------------------


def _read_section(reader: ByteReader) -> Section:
    name = reader.read_string()
    pair_count = reader.read_count("pair")
    pairs = []
    for _ in range(pair_count):
        key = reader.read_string()
        value = reader.read_string()
        pairs.append((key, value))
    return Section(name, tuple(pairs))


def _read_file(reader: ByteReader) -> BundleFile:
    name = reader.read_string()
    section_count = reader.read_count("section")
    sections = [_read_section(reader) for _ in range(section_count)]
    logger.debug("read file %r: %d sections", name, section_count)
    return BundleFile(name, tuple(sections))


def parse_bundle_bytes(
    data: bytes,
    name: str,
    *,
    allow_trailing: bool = False,
    source: str | Path | None = None,
) -> Bundle:
    """Parse a binary bundle.

    Args:
        data: Raw bundle bytes.
        name: Bundle name to assign (not stored in the binary form).
        allow_trailing: If True, bytes after the last file are ignored with a
            warning instead of raising.
        source: Optional path used in error messages.

    Raises:
        FormatError: on truncation, negative counts, positive string length
            markers, or unexpected trailing bytes.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"parse_bundle_bytes: expected bytes, got {type(data).__name__}")

    reader = ByteReader(bytes(data), source=str(source) if source is not None else None)
    file_count = reader.read_count("file")
    files = [_read_file(reader) for _ in range(file_count)]

    if reader.remaining:
        if not allow_trailing:
            raise reader.error(f"{reader.remaining} unexpected trailing bytes after last file")
        logger.warning("ignoring %d trailing bytes at offset %d", reader.remaining, reader.offset)

    return Bundle(name, tuple(files))


def read_binary(
    name: str,
    path: str | Path,
    *,
    allow_trailing: bool = False,
) -> Bundle:
    """Read a binary bundle from disk."""
    p = Path(path)
    data = p.read_bytes()
    logger.debug("read %d bytes from %s", len(data), p)
    return parse_bundle_bytes(data, name, allow_trailing=allow_trailing, source=p)


# ----------------------------
# Write
# ----------------------------


def dump_bundle_bytes(bundle: Bundle) -> bytes:
    """Serialize `bundle` to its binary form (deterministic)."""
    out = bytearray()
    out += pack_int32(len(bundle.files))
    for f in bundle.files:
        out += encode_string(f.name)
        out += pack_int32(len(f.sections))
        for section in f.sections:
            out += encode_string(section.name)
            out += pack_int32(len(section.pairs))
            for key, value in section.pairs:
                out += encode_string(key)
                out += encode_string(value)
    return bytes(out)


def write_binary(bundle: Bundle, path: str | Path) -> None:
    """Write `bundle` to `path` in binary form."""
    data = dump_bundle_bytes(bundle)
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    logger.debug("wrote %d files (%d bytes) to %s", len(bundle.files), len(data), out_path)

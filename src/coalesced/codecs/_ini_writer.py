"""Internal writer helpers for the per-file text (INI-like) codec.

Formatting never approximates: anything `_ini_parser.parse_lines` would read
back differently is rejected here with `FormatError`.

This is a private module; public API is in `ini_text.py`.
"""

from __future__ import annotations

from coalesced.codecs._ini_parser import MULTILINE_MARKER, PAIR_SEPARATOR, is_section_header
from coalesced.core.errors import FormatError
from coalesced.core.folding import has_line_break, split_value
from coalesced.core.model import BundleFile, Section


def _check_section_name(section: Section, *, source: str | None) -> None:
    name = section.name
    if not name.strip():
        raise FormatError("section name must not be empty or whitespace", source=source)
    if has_line_break(name):
        raise FormatError(f"section name {name!r} contains a line break", source=source)


def _check_key(key: str, *, section: str, source: str | None) -> None:
    where = f"[{section}] key {key!r}"
    if PAIR_SEPARATOR in key:
        raise FormatError(f"{where} contains '{PAIR_SEPARATOR}'", source=source)
    if has_line_break(key):
        raise FormatError(f"{where} contains a line break", source=source)
    if key.endswith(MULTILINE_MARKER):
        raise FormatError(f"{where} ends with the multi-line marker '{MULTILINE_MARKER}'", source=source)


def _check_record(record: str, *, section: str, source: str | None) -> None:
    if is_section_header(record):
        raise FormatError(f"[{section}] record {record!r} would read back as a section header", source=source)


def format_section(section: Section, *, source: str | None = None) -> list[str]:
    """Format one section as physical lines (header first)."""
    _check_section_name(section, source=source)
    lines: list[str] = [f"[{section.name}]"]

    prev_key: str | None = None
    for key, value in section.pairs:
        _check_key(key, section=section.name, source=source)
        try:
            folded = split_value(value)
        except FormatError as e:
            raise FormatError(f"[{section.name}] {key}: {e.message}", source=source) from e

        if len(folded) == 1:
            records = [f"{key}{PAIR_SEPARATOR}{value}"]
        else:
            if key == prev_key:
                raise FormatError(
                    f"[{section.name}] multi-line value for {key!r} directly follows a pair with the "
                    "same key and would merge into it on import",
                    source=source,
                )
            records = [f"{key}{MULTILINE_MARKER}{PAIR_SEPARATOR}{line}" for line in folded]

        for record in records:
            _check_record(record, section=section.name, source=source)
        lines.extend(records)
        prev_key = key
    return lines


def format_file(bundle_file: BundleFile, *, source: str | None = None) -> list[str]:
    """Format every section of `bundle_file` as physical lines."""
    lines: list[str] = []
    for section in bundle_file.sections:
        lines.extend(format_section(section, source=source))
    return lines

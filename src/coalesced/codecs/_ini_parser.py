"""Internal parsing helpers for the per-file text (INI-like) codec.

Private module; public API is in `ini_text.py`.
"""

from __future__ import annotations

from typing import Iterable

from coalesced.core.errors import FormatError
from coalesced.core.folding import CRLF
from coalesced.core.model import Pair, Section

MULTILINE_MARKER = "||"
PAIR_SEPARATOR = "="


def is_section_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


class _SectionAccumulator:
    """The section currently being filled. Pairs stay mutable until flushed."""

    def __init__(self, name: str):
        self.name = name
        self.pairs: list[Pair] = []

    def add(self, key: str, value: str) -> None:
        self.pairs.append((key, value))

    def continue_or_add(self, key: str, value: str) -> None:
        # A folded record continues the previous pair only if the keys match.
        if self.pairs and self.pairs[-1][0] == key:
            last_key, last_value = self.pairs[-1]
            self.pairs[-1] = (last_key, last_value + CRLF + value)
        else:
            self.pairs.append((key, value))

    def freeze(self) -> Section:
        return Section(self.name, tuple(self.pairs))


def _parse_header(line: str, *, source: str | None, lineno: int) -> str:
    header = line[1:-1]
    if not header or not header.strip():
        raise FormatError("section header must contain a name", source=source, line=lineno)
    return header


def parse_lines(lines: Iterable[str], *, source: str | None = None) -> tuple[Section, ...]:
    """Parse physical lines (without line terminators) into sections.

    Two states: no section open, or a section open. The open section is
    flushed when the next header arrives and at end of input.
    """
    sections: list[Section] = []
    current: _SectionAccumulator | None = None

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        if is_section_header(line):
            name = _parse_header(line, source=source, lineno=lineno)
            if current is not None:
                sections.append(current.freeze())
            current = _SectionAccumulator(name)
            continue

        chunks = line.split(PAIR_SEPARATOR, 1)
        if len(chunks) != 2:
            raise FormatError(
                f"expected 'key{PAIR_SEPARATOR}value' or a [section] header", source=source, line=lineno
            )
        if current is None:
            raise FormatError("key/value line before the first section header", source=source, line=lineno)

        key, value = chunks
        if key.endswith(MULTILINE_MARKER):
            current.continue_or_add(key[: -len(MULTILINE_MARKER)], value)
        else:
            current.add(key, value)

    if current is not None:
        sections.append(current.freeze())
    return tuple(sections)

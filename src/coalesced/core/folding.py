"""Folding of multi-line values into single physical text lines.

Binary values are atomic strings and may contain line breaks. The text form
holds one record per physical line, so a multi-line value is split into lines
on export (`split_value`) and reassembled on import (`join_lines`).

Line-break handling:
- CRLF present: split on CRLF.
- only bare CR: split on CR.
- only bare LF: split on LF.
- both CR and LF but no CRLF: rejected ("mixed line endings").

Reassembly always uses CRLF, so values that used bare CR or bare LF come back
normalized to CRLF. That normalization is accepted; anything else that can't
be reproduced exactly is rejected with `FormatError`.
"""

from __future__ import annotations

from coalesced.core.errors import FormatError
from coalesced.core.model import Bundle, BundleFile, Section

CRLF = "\r\n"
CR = "\r"
LF = "\n"


def has_line_break(value: str) -> bool:
    return CR in value or LF in value


def split_value(value: str) -> list[str]:
    """Split `value` into physical lines.

    Returns a single-element list when the value needs no folding.

    Raises:
        FormatError: on mixed line endings.
    """
    if not has_line_break(value):
        return [value]

    if CRLF in value:
        lines = value.split(CRLF)
        # Leftover bare CR/LF in a CRLF-split piece would still break the line.
        for line in lines:
            if has_line_break(line):
                raise FormatError("value mixes CRLF with bare CR or LF line endings")
        return lines
    if CR in value and LF not in value:
        return value.split(CR)
    if LF in value and CR not in value:
        return value.split(LF)
    raise FormatError("value contains both CR and LF but not in a CRLF sequence (mixed line endings)")


def join_lines(lines: list[str]) -> str:
    """Reassemble folded lines using the canonical CRLF separator."""
    return CRLF.join(lines)


def normalize_value(value: str) -> str:
    """The value as it reads back after a text round trip."""
    if not has_line_break(value):
        return value
    return join_lines(split_value(value))


def normalize_bundle(bundle: Bundle) -> Bundle:
    """Copy of `bundle` with every value's line endings normalized to CRLF."""
    return Bundle(
        bundle.name,
        tuple(
            BundleFile(
                f.name,
                tuple(Section(s.name, tuple((k, normalize_value(v)) for k, v in s.pairs)) for s in f.sections),
            )
            for f in bundle.files
        ),
    )

"""Per-file text codec (INI-like syntax).

Each bundle file becomes one text file:

    [SectionName]
    key=value
    Desc||=Line A
    Desc||=Line B

Records:
- `[Name]` opens a section; the name must be non-empty and not whitespace.
- `key=value` is one pair; the line is split on the FIRST `=`.
- `key||=line` is one physical line of a multi-line value. Consecutive
  records with the same key are rejoined with CRLF on import.
- blank / whitespace-only lines are ignored.

Duplicate keys are legal and preserved in order.
"""

from __future__ import annotations

from pathlib import Path

from coalesced.codecs._ini_parser import MULTILINE_MARKER, parse_lines
from coalesced.codecs._ini_writer import format_file, format_section
from coalesced.core.errors import FormatError, MissingResourceError
from coalesced.core.model import BundleFile, Section

TEXT_ENCODING = "utf-8"
# Tolerate a BOM added by text editors.
READ_ENCODING = "utf-8-sig"

__all__ = [
    "MULTILINE_MARKER",
    "TEXT_ENCODING",
    "READ_ENCODING",
    "format_section",
    "parse_file_text",
    "dump_file_text",
    "read_file_text",
    "write_file_text",
]


def parse_file_text(text: str, name: str, *, source: str | Path | None = None) -> BundleFile:
    """Parse the text of one extracted file into a `BundleFile` named `name`.

    Lines may be terminated by LF, CRLF or CR.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_file_text: expected str, got {type(text).__name__}")
    # Only CR/LF terminate records; str.splitlines() would also break on
    # characters like U+2028 that are valid inside a value.
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    sections: tuple[Section, ...] = parse_lines(lines, source=str(source) if source is not None else None)
    return BundleFile(name, sections)


def dump_file_text(bundle_file: BundleFile, *, source: str | Path | None = None) -> str:
    """Format `bundle_file` as text (LF line endings, trailing newline)."""
    lines = format_file(bundle_file, source=str(source) if source is not None else None)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def read_file_text(path: str | Path, name: str) -> BundleFile:
    """Read one extracted text file from disk."""
    p = Path(path)
    if not p.is_file():
        raise MissingResourceError("extracted file not found", p)
    try:
        with p.open("r", encoding=READ_ENCODING, errors="surrogatepass", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"not valid {READ_ENCODING} text: {e.reason}", source=p, offset=e.start) from e
    return parse_file_text(text, name, source=p)


def write_file_text(path: str | Path, bundle_file: BundleFile) -> None:
    """Write one bundle file as text to `path`."""
    p = Path(path)
    text = dump_file_text(bundle_file, source=p)
    # newline="" prevents Python from translating newlines on write
    with p.open("w", encoding=TEXT_ENCODING, errors="surrogatepass", newline="") as f:
        f.write(text)

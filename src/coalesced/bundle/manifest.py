"""Manifest for extracted (text) bundles.

An extracted bundle is a directory with one text file per bundle file plus a
manifest named after the bundle (extension replaced by `.extracted`):

    <bundle name>
    <file count>
    <escaped path>;;<original name>
    ...

Bundle file names may contain path separators or `..`, so they are escaped
before touching the filesystem. Escaping is plain character substitution and
is not bijective; the manifest is what maps each on-disk name back to its
original. Collisions are detected when the manifest is built.

This module is intentionally small and must not import `bundle.io`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath

from coalesced.codecs.ini_text import READ_ENCODING, TEXT_ENCODING
from coalesced.core.errors import FormatError, MissingResourceError, NameCollisionError
from coalesced.core.model import Bundle

MANIFEST_SUFFIX = ".extracted"
MANIFEST_SEPARATOR = ";;"


def _has_line_break(s: str) -> bool:
    return "\r" in s or "\n" in s


def escape_name(name: str) -> str:
    """Return an on-disk-safe relative filename for a bundle file name."""
    return name.replace("\\", "_").replace("/", "_").replace("..", "-")


def manifest_filename(name: str) -> str:
    """Manifest filename for bundle `name` (`Coalesced_INT.bin` -> `Coalesced_INT.extracted`)."""
    base = PurePath(name).name
    if not base or base in {".", ".."} or "\0" in base:
        raise FormatError(f"invalid bundle name {name!r}")
    return str(PurePath(base).with_suffix(MANIFEST_SUFFIX))


@dataclass(frozen=True)
class ManifestEntry:
    escaped_path: str
    original_name: str


@dataclass(frozen=True)
class Manifest:
    bundle_name: str
    entries: tuple[ManifestEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))


def build_manifest(bundle: Bundle, *, manifest_name: str | None = None) -> Manifest:
    """Build the manifest for `bundle`, rejecting on-disk name collisions.

    Raises:
        NameCollisionError: if two files escape to the same name, or a file
            escapes to the manifest's own filename or to an unusable name.
    """
    reserved = manifest_name if manifest_name is not None else manifest_filename(bundle.name)
    if _has_line_break(bundle.name):
        raise FormatError(f"bundle name {bundle.name!r} contains a line break")
    seen: dict[str, str] = {}
    entries: list[ManifestEntry] = []
    for f in bundle.files:
        if _has_line_break(f.name):
            raise FormatError(f"file name {f.name!r} contains a line break")
        escaped = escape_name(f.name)
        if escaped in {"", "."} or "\0" in escaped:
            raise NameCollisionError(f"file name {f.name!r} escapes to unusable on-disk name {escaped!r}")
        if escaped == reserved:
            raise NameCollisionError(f"file name {f.name!r} collides with manifest filename {reserved!r}")
        if (escaped + MANIFEST_SEPARATOR).find(MANIFEST_SEPARATOR) != len(escaped):
            raise FormatError(f"file name {f.name!r} can't be listed in a manifest (contains ';' separator)")
        if escaped in seen:
            raise NameCollisionError(
                f"file names {seen[escaped]!r} and {f.name!r} both escape to {escaped!r}"
            )
        seen[escaped] = f.name
        entries.append(ManifestEntry(escaped, f.name))
    return Manifest(bundle.name, tuple(entries))


def write_manifest(path: Path, manifest: Manifest) -> None:
    lines = [manifest.bundle_name, str(len(manifest.entries))]
    for entry in manifest.entries:
        lines.append(f"{entry.escaped_path}{MANIFEST_SEPARATOR}{entry.original_name}")
    for i, line in enumerate(lines):
        if _has_line_break(line):
            raise FormatError("manifest line may not contain a line break", source=path, line=i + 1)

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    # newline="" prevents Python from translating newlines on write
    with p.open("w", encoding=TEXT_ENCODING, errors="surrogatepass", newline="") as f:
        for line in lines:
            f.write(line + "\n")


def read_manifest(path: Path) -> Manifest:
    """Parse a manifest file.

    Raises:
        MissingResourceError: if the manifest does not exist.
        FormatError: on a bad count line, too few entry lines, or an entry
            that doesn't split into exactly two parts.
    """
    p = Path(path)
    if not p.is_file():
        raise MissingResourceError("manifest not found", p)

    try:
        with p.open("r", encoding=READ_ENCODING, errors="surrogatepass") as f:
            lines = [line[:-1] if line.endswith("\n") else line for line in f]
    except UnicodeDecodeError as e:
        raise FormatError(f"not valid {READ_ENCODING} text: {e.reason}", source=p, offset=e.start) from e

    if len(lines) < 2:
        raise FormatError("manifest must have a name line and a count line", source=p)

    bundle_name = lines[0]
    count_text = lines[1].strip("\r\n ")
    # int() alone would also take "1_0" and non-ASCII digits.
    if not (count_text.isascii() and count_text.lstrip("+-").isdigit()):
        raise FormatError(f"expected an integer file count, got {count_text!r}", source=p, line=2)
    count = int(count_text)
    if count < 0:
        raise FormatError(f"negative file count {count}", source=p, line=2)
    if len(lines) < 2 + count:
        raise FormatError(f"manifest lists {count} files but has only {len(lines) - 2} entry lines", source=p)

    entries: list[ManifestEntry] = []
    for i in range(count):
        lineno = 3 + i
        chunks = lines[2 + i].split(MANIFEST_SEPARATOR, 1)
        if len(chunks) != 2:
            raise FormatError(
                f"expected '<escaped path>{MANIFEST_SEPARATOR}<original name>'", source=p, line=lineno
            )
        entries.append(ManifestEntry(chunks[0], chunks[1]))

    return Manifest(bundle_name, tuple(entries))

"""Extracted bundle save/load (directory of text files + manifest).

An extracted bundle is a folder containing:
- one text file per bundle file, named by `escape_name(file.name)`
- `<bundle name>.extracted`, the manifest mapping escaped names back to the
  original file names (see `manifest.py`)

Writing is not atomic: on failure a partially written directory is left
behind. Everything that can be checked up front (name collisions, content the
text form can't represent) is checked before the first file is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from coalesced.codecs.ini_text import TEXT_ENCODING, dump_file_text, read_file_text
from coalesced.core.model import Bundle

from .manifest import build_manifest, manifest_filename, read_manifest, write_manifest

logger = logging.getLogger(__name__)


def write_text(bundle: Bundle, directory: str | Path) -> Path:
    """Write `bundle` as an extracted directory and return the manifest path.

    Raises:
        NameCollisionError: if two files would share an on-disk name.
        FormatError: if any file holds content the text form can't reproduce.
    """
    root = Path(directory)
    manifest_name = manifest_filename(bundle.name)
    manifest = build_manifest(bundle, manifest_name=manifest_name)

    # Render everything first so representability errors surface before any I/O.
    rendered: list[tuple[Path, str]] = []
    for entry, f in zip(manifest.entries, bundle.files):
        out_path = root / entry.escaped_path
        rendered.append((out_path, dump_file_text(f, source=out_path)))

    root.mkdir(parents=True, exist_ok=True)
    for out_path, text in rendered:
        # newline="" prevents Python from translating newlines on write
        with out_path.open("w", encoding=TEXT_ENCODING, errors="surrogatepass", newline="") as fh:
            fh.write(text)
        logger.debug("wrote %s", out_path)

    manifest_path = root / manifest_name
    write_manifest(manifest_path, manifest)
    logger.debug("wrote manifest %s (%d files)", manifest_path, len(manifest.entries))
    return manifest_path


def read_text(directory: str | Path, name: str) -> Bundle:
    """Load an extracted directory.

    `name` is only used to locate the manifest (`<name>.extracted`); the
    returned bundle takes its name from the manifest's first line, and each
    file takes its logical name from the manifest entry.

    Raises:
        MissingResourceError: if the manifest or a listed text file is missing.
        FormatError: on a malformed manifest or text file.
    """
    root = Path(directory)
    manifest = read_manifest(root / manifest_filename(name))

    files = []
    for entry in manifest.entries:
        files.append(read_file_text(root / entry.escaped_path, entry.original_name))
        logger.debug("read %s as %r", entry.escaped_path, entry.original_name)

    return Bundle(manifest.bundle_name, tuple(files))

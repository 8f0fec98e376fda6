"""Extracted bundle I/O (directory-on-disk format).

- one INI-like text file per bundle file, named by `escape_name()`
- `<bundle name>.extracted` manifest mapping escaped names to original names
"""

from __future__ import annotations

from .io import read_text, write_text
from .manifest import Manifest, ManifestEntry, build_manifest, escape_name, manifest_filename

__all__ = [
    "Manifest",
    "ManifestEntry",
    "build_manifest",
    "escape_name",
    "manifest_filename",
    "read_text",
    "write_text",
]

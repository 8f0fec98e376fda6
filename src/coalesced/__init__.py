"""coalesced: binary resource bundle <-> editable text directory.

The four codec operations:

- `read_binary(name, path)` -> Bundle
- `write_text(bundle, directory)`
- `read_text(directory, name)` -> Bundle
- `write_binary(bundle, path)`
"""

from __future__ import annotations

from coalesced.bundle.io import read_text, write_text
from coalesced.codecs.binary import read_binary, write_binary
from coalesced.core import Bundle, BundleFile, FormatError, MissingResourceError, NameCollisionError, Section

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Bundle",
    "BundleFile",
    "Section",
    "FormatError",
    "NameCollisionError",
    "MissingResourceError",
    "read_binary",
    "write_binary",
    "read_text",
    "write_text",
]

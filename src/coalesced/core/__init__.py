"""Core data model, error kinds and value folding.

This package is intentionally standalone and must not import cli/codecs/bundle
to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import FormatError, MissingResourceError, NameCollisionError
from .folding import join_lines, split_value
from .model import Bundle, BundleFile, Pair, Section

__all__ = [
    "Bundle",
    "BundleFile",
    "Section",
    "Pair",
    "FormatError",
    "NameCollisionError",
    "MissingResourceError",
    "split_value",
    "join_lines",
]

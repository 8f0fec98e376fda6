"""Codecs for the binary bundle format and the per-file text format.

- `binary`: the nested binary bundle (little-endian Int32 + UTF-16LE strings)
- `ini_text`: one bundle file as INI-like text with multi-line folding
"""

from __future__ import annotations

__all__: list[str] = []

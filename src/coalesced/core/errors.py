"""Error kinds raised by the bundle codecs.

All codec failures are fatal at the point of detection. Messages are
deterministic so tests can assert on them, and carry enough context (source
file, line number or byte offset) for a caller to report where things broke.

Plain `OSError`s from the filesystem are not wrapped; they propagate as-is.
"""

from __future__ import annotations

from pathlib import Path


class FormatError(ValueError):
    """Malformed binary stream or text representation.

    Also raised on export when a bundle holds content that the target
    representation cannot reproduce exactly (e.g. mixed line endings).
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | Path | None = None,
        line: int | None = None,
        offset: int | None = None,
    ):
        self.message = message
        self.source = str(source) if source is not None else None
        self.line = line
        self.offset = offset
        super().__init__(self._render())

    def _render(self) -> str:
        where: list[str] = []
        if self.source is not None:
            where.append(self.source)
        if self.line is not None:
            where.append(f"line {self.line}")
        if self.offset is not None:
            where.append(f"offset {self.offset}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"


class NameCollisionError(FormatError):
    """Two bundle files would be written to the same on-disk name."""


class MissingResourceError(FileNotFoundError):
    """A manifest or a per-file text file referenced by it does not exist."""

    def __init__(self, message: str, path: str | Path):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")

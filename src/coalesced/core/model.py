"""In-memory bundle model shared by the binary and text codecs.

A bundle is an ordered list of files; a file is an ordered list of sections; a
section is an ordered list of `(key, value)` pairs. Order is part of the
round-trip contract at every level, and keys are NOT unique: a section may hold
the same key several times, so pairs are kept as a tuple of tuples rather than a
mapping.

All classes are frozen; sequences are coerced to tuples on construction so a
loaded bundle can't be mutated in place.

This module must not import codecs/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

Pair = tuple[str, str]


def _require_str(value: Any, *, where: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{where}: expected str, got {type(value).__name__}")
    return value


def _coerce_pairs(raw: Iterable[Any], *, where: str) -> tuple[Pair, ...]:
    if isinstance(raw, (str, bytes, dict)):
        raise TypeError(f"{where}: expected a sequence of (key, value) pairs, got {type(raw).__name__}")
    pairs: list[Pair] = []
    for i, item in enumerate(raw):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise TypeError(f"{where}[{i}]: expected a (key, value) pair")
        key = _require_str(item[0], where=f"{where}[{i}].key")
        value = _require_str(item[1], where=f"{where}[{i}].value")
        pairs.append((key, value))
    return tuple(pairs)


def _coerce_items(raw: Iterable[Any], cls: type, *, where: str) -> tuple[Any, ...]:
    if isinstance(raw, (str, bytes)):
        raise TypeError(f"{where}: expected a sequence, got {type(raw).__name__}")
    items = tuple(raw)
    for i, item in enumerate(items):
        if not isinstance(item, cls):
            raise TypeError(f"{where}[{i}]: expected {cls.__name__}, got {type(item).__name__}")
    return items


@dataclass(frozen=True)
class Section:
    """Named, ordered list of key/value pairs."""

    name: str
    pairs: tuple[Pair, ...] = ()

    def __post_init__(self) -> None:
        _require_str(self.name, where="Section.name")
        object.__setattr__(self, "pairs", _coerce_pairs(self.pairs, where=f"Section[{self.name!r}].pairs"))

    def values(self, key: str) -> list[str]:
        """Return every value stored under `key`, in order."""
        return [v for k, v in self.pairs if k == key]


@dataclass(frozen=True)
class BundleFile:
    """A named file inside a bundle.

    `name` is the logical name as stored in the binary form. It may contain
    path-like separators; it is never used as a filesystem path directly.
    """

    name: str
    sections: tuple[Section, ...] = ()

    def __post_init__(self) -> None:
        _require_str(self.name, where="BundleFile.name")
        object.__setattr__(
            self,
            "sections",
            _coerce_items(self.sections, Section, where=f"BundleFile[{self.name!r}].sections"),
        )

    @property
    def pair_count(self) -> int:
        return sum(len(s.pairs) for s in self.sections)


@dataclass(frozen=True)
class Bundle:
    """Top-level container.

    The binary form does not store a bundle name; `name` is supplied by whoever
    loads the bundle and is only used for manifest bookkeeping.
    """

    name: str
    files: tuple[BundleFile, ...] = ()

    def __post_init__(self) -> None:
        _require_str(self.name, where="Bundle.name")
        object.__setattr__(self, "files", _coerce_items(self.files, BundleFile, where="Bundle.files"))

    def file(self, name: str) -> BundleFile:
        """Return the first file with logical name `name`."""
        for f in self.files:
            if f.name == name:
                return f
        raise KeyError(name)

"""Helpers shared by CLI subcommands."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from coalesced.core.errors import FormatError, MissingResourceError

# Exit code for malformed input / missing resources (typer uses 2 for usage errors too).
EXIT_BAD_INPUT = 2


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn codec errors into a one-line message on stderr and a non-zero exit."""
    try:
        yield
    except (FormatError, MissingResourceError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT) from e


def default_name(path: str | Path, name: Optional[str]) -> str:
    """Bundle name: explicit `--name`, else the binary's filename."""
    if name:
        return name
    return Path(path).name


def default_extract_dir(bin_path: str | Path) -> Path:
    """`.../Coalesced_INT.bin` -> `.../Coalesced_INT`."""
    p = Path(bin_path)
    return p.with_suffix("") if p.suffix else p.with_name(p.name + "_extracted")

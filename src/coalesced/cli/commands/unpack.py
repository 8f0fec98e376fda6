"""`coalesced unpack` command.

Reads a binary bundle and writes it as an extracted directory:
- one text file per bundle file
- `<name>.extracted` manifest
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from coalesced.bundle.io import write_text
from coalesced.cli.commands._shared import default_extract_dir, default_name, reported_errors
from coalesced.codecs.binary import read_binary


def register(app: typer.Typer) -> None:
    @app.command("unpack")
    def unpack(
        bin_path: str = typer.Argument(..., help="Path to a binary bundle."),
        out_dir: Optional[str] = typer.Option(
            None,
            "--out-dir",
            help="Output directory (default: the bundle path without its extension).",
        ),
        name: Optional[str] = typer.Option(None, "--name", help="Bundle name (default: the bundle's filename)."),
        allow_trailing: bool = typer.Option(
            False,
            "--allow-trailing",
            help="Ignore bytes after the last file instead of failing.",
        ),
    ) -> None:
        """Extract a binary bundle into editable text files."""
        bundle_name = default_name(bin_path, name)
        root = Path(out_dir) if out_dir else default_extract_dir(bin_path)

        with reported_errors():
            bundle = read_binary(bundle_name, bin_path, allow_trailing=allow_trailing)
            write_text(bundle, root)

        typer.echo(str(root))

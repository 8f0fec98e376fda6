"""`coalesced pack` command.

Reads an extracted directory (located through its `<name>.extracted` manifest)
and writes the binary bundle.
"""

from __future__ import annotations

from typing import Optional

import typer

from coalesced.bundle.io import read_text
from coalesced.cli.commands._shared import default_name, reported_errors
from coalesced.codecs.binary import write_binary


def register(app: typer.Typer) -> None:
    @app.command("pack")
    def pack(
        src_dir: str = typer.Argument(..., help="Extracted bundle directory."),
        out: str = typer.Argument(..., help="Output binary bundle path."),
        name: Optional[str] = typer.Option(
            None,
            "--name",
            help="Bundle name used to find the manifest (default: the output filename).",
        ),
    ) -> None:
        """Rebuild a binary bundle from an extracted directory."""
        bundle_name = default_name(out, name)

        with reported_errors():
            bundle = read_text(src_dir, bundle_name)
            write_binary(bundle, out)

        typer.echo(out)

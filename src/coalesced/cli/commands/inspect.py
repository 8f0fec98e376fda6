"""`coalesced inspect` command.

Prints a per-file summary (sections, pairs, multi-line values) of either a
binary bundle or an extracted directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from coalesced.bundle.io import read_text
from coalesced.cli.commands._shared import default_name, reported_errors
from coalesced.codecs.binary import read_binary
from coalesced.core.tables import bundle_to_frame, summarize_bundle


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect(
        path: str = typer.Argument(..., help="Binary bundle file or extracted directory."),
        name: Optional[str] = typer.Option(
            None,
            "--name",
            help="Bundle name (default: the filename; required for directories).",
        ),
        pairs: bool = typer.Option(False, "--pairs", help="List every pair instead of per-file counts."),
    ) -> None:
        """Summarize the contents of a bundle."""
        p = Path(path)
        with reported_errors():
            if p.is_dir():
                if not name:
                    raise typer.BadParameter("--name is required when inspecting a directory")
                bundle = read_text(p, name)
            else:
                bundle = read_binary(default_name(p, name), p)

        df = bundle_to_frame(bundle) if pairs else summarize_bundle(bundle)
        typer.echo(f"{bundle.name}: {len(bundle.files)} files")
        if len(df):
            typer.echo(df.to_string(index=False))

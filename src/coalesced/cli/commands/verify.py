"""`coalesced verify` command.

Round-trips a binary bundle through the text form and checks that nothing was
lost:

    binary -> bundle -> text dir -> bundle -> binary

The rebuilt bytes are compared with the bundle as first read, after the one
accepted normalization (bare CR / bare LF line endings become CRLF). Exit code
1 on mismatch.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

import typer

from coalesced.bundle.io import read_text, write_text
from coalesced.cli.commands._shared import default_name, reported_errors
from coalesced.codecs.binary import dump_bundle_bytes, parse_bundle_bytes
from coalesced.core.folding import normalize_bundle


def _first_difference(a: bytes, b: bytes) -> int:
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    return min(len(a), len(b))


def _roundtrip(data: bytes, name: str, work_dir: Path) -> tuple[bytes, bytes]:
    """Return (expected, rebuilt) serializations."""
    bundle = parse_bundle_bytes(data, name)
    write_text(bundle, work_dir)
    rebuilt = dump_bundle_bytes(read_text(work_dir, name))
    return dump_bundle_bytes(normalize_bundle(bundle)), rebuilt


def register(app: typer.Typer) -> None:
    @app.command("verify")
    def verify(
        bin_path: str = typer.Argument(..., help="Path to a binary bundle."),
        name: Optional[str] = typer.Option(None, "--name", help="Bundle name (default: the bundle's filename)."),
        work_dir: Optional[str] = typer.Option(
            None,
            "--work-dir",
            help="Keep the extracted text here instead of a temporary directory.",
        ),
    ) -> None:
        """Check that a bundle survives binary -> text -> binary unchanged."""
        bundle_name = default_name(bin_path, name)
        data = Path(bin_path).read_bytes()

        with reported_errors():
            if work_dir:
                expected, rebuilt = _roundtrip(data, bundle_name, Path(work_dir))
            else:
                with tempfile.TemporaryDirectory(prefix="coalesced-") as tmp:
                    expected, rebuilt = _roundtrip(data, bundle_name, Path(tmp))

        if rebuilt != expected:
            at = _first_difference(expected, rebuilt)
            typer.echo(
                f"MISMATCH: rebuilt bundle differs at byte {at} ({len(expected)} vs {len(rebuilt)} bytes)",
                err=True,
            )
            raise typer.Exit(code=1)

        if rebuilt != data:
            # Bare CR/LF values and terminator-only empty strings are canonicalized.
            typer.echo("OK (normalized: source bytes differ from canonical serialization)")
            return
        typer.echo("OK")

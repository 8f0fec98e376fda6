"""coalesced CLI entrypoint.

Thin driver over the four codec operations: `unpack` (binary -> text),
`pack` (text -> binary), `verify` (round trip) and `inspect`.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="coalesced",
    add_completion=False,
    no_args_is_help=True,
    help="Convert binary resource bundles to editable text directories and back.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log codec progress to stderr."),
) -> None:
    """coalesced CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("version")
def version() -> None:
    """Print the installed coalesced version."""
    from coalesced import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `coalesced --help` is fast.
    """
    from coalesced.cli.commands import inspect as inspect_cmd
    from coalesced.cli.commands import pack as pack_cmd
    from coalesced.cli.commands import unpack as unpack_cmd
    from coalesced.cli.commands import verify as verify_cmd

    unpack_cmd.register(app)
    pack_cmd.register(app)
    verify_cmd.register(app)
    inspect_cmd.register(app)


_register_commands()

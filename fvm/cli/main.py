"""Typer CLI for fvm: wiring hub for command modules."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from fvm.cli._helpers import console, exit_on_error, resolve_or_exit
from fvm.cli.config_cmd import app as config_app

app = typer.Typer(
    name="fvm",
    help="Flutter version manager: home directory and configuration.",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    if value:
        from fvm import __version__

        console.print(f"fvm {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """fvm: manage the fvm home directory."""
    from fvm._log import setup_logging

    setup_logging(verbose=verbose)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def home() -> None:
    """Print the fvm home directory, creating it on first use."""
    typer.echo(str(resolve_or_exit().home))


@app.command()
def env() -> None:
    """Show the fvm home layout and the current working directory."""
    from fvm.home import get_resolver, working_dir

    resolver = get_resolver()
    resolved = resolve_or_exit()
    with exit_on_error():
        rows = [
            ("Home", resolved.home),
            ("Config file", resolved.config_path),
            ("Versions", resolver.versions_dir()),
            ("Temp", resolver.temp_dir()),
            ("Working dir", working_dir()),
        ]

    table = Table(title="fvm environment")
    table.add_column("Name", style="cyan")
    table.add_column("Path")
    for name, path in rows:
        table.add_row(name, escape(str(path)))
    console.print(table)

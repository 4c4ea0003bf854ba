"""Config sub-commands: list, get, set, unset."""

from __future__ import annotations

from typing import Annotated

import typer
import yaml
from rich.markup import escape
from rich.table import Table

from fvm.cli._helpers import console, exit_on_error, fail, resolve_or_exit
from fvm.config import Scalar

app = typer.Typer(help="Read and edit the fvm config file.")


_NULL_WORDS = frozenset({"null", "~"})


def _parse_value(raw: str) -> Scalar:
    """Keep ``true``, ``3`` and ``0.5`` typed; store anything else exactly as typed."""
    if raw in _NULL_WORDS:
        return None
    if "#" in raw:
        return raw
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(value, (bool, int, float)):
        return value
    return raw


def _format_value(value: Scalar) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command("list")
def config_list() -> None:
    """Show every config key, including runtime-only values."""
    resolved = resolve_or_exit()
    store = resolved.config

    table = Table(title=f"Config: {escape(str(store.path))}")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    for key, value in sorted(store.as_dict().items()):
        source = "runtime" if store.is_runtime(key) else "file"
        table.add_row(escape(key), escape(_format_value(value)), source)

    console.print(table)


@app.command("get")
def config_get(
    key: Annotated[str, typer.Argument(help="Config key")],
) -> None:
    """Print the value of a config key."""
    store = resolve_or_exit().config
    if key not in store:
        raise fail(f"Config key '{key}' is not set")
    typer.echo(_format_value(store.get(key)))


@app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Config key")],
    value: Annotated[str, typer.Argument(help="Value, parsed as a YAML scalar")],
) -> None:
    """Set a config key and save the config file."""
    from fvm.home import HOME_KEY

    if key == HOME_KEY:
        raise fail(f"'{HOME_KEY}' is derived from the environment and cannot be set")

    store = resolve_or_exit().config
    store.set(key, _parse_value(value))
    with exit_on_error():
        store.save()
    console.print(f"[green]Set[/green] {escape(key)}", soft_wrap=True)


@app.command("unset")
def config_unset(
    key: Annotated[str, typer.Argument(help="Config key")],
) -> None:
    """Remove a config key and save the config file."""
    store = resolve_or_exit().config
    try:
        store.unset(key)
    except KeyError:
        raise fail(f"Config key '{key}' is not set in {store.path}") from None
    with exit_on_error():
        store.save()
    console.print(f"[green]Removed[/green] {escape(key)}", soft_wrap=True)

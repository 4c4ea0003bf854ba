"""Shared CLI helpers: console and fatal error handling."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

from fvm._log import get_logger
from fvm.errors import FvmError

if TYPE_CHECKING:
    from fvm.home import ResolvedHome

console = Console()

_logger = get_logger("cli")


def fail(message: str) -> typer.Exit:
    """Print a single diagnostic line and return the exit to raise."""
    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    return typer.Exit(1)


@contextmanager
def exit_on_error():
    """Turn an :class:`FvmError` or stray ``OSError`` inside the block into exit status 1."""
    try:
        yield
    except (FvmError, OSError) as e:
        _logger.debug("%s: %s", type(e).__name__, e, exc_info=True)
        raise fail(str(e)) from None


def resolve_or_exit() -> ResolvedHome:
    from fvm.home import get_resolver

    with exit_on_error():
        return get_resolver().resolve()

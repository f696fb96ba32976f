"""CLI — Shared state and error reporting for commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

import typer
from rich.console import Console

from flux_framework.config import Settings
from flux_framework.exceptions import FluxError, PrivilegeError
from flux_framework.system import is_root

console = Console()
err_console = Console(stderr=True)


@dataclass
class CliState:
    settings: Settings


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        # Command invoked on its own (tests, embedding); fall back to defaults.
        state = CliState(settings=Settings.load())
        ctx.obj = state
    return state


def fail(exc: FluxError) -> NoReturn:
    err_console.print(f"[red]Error: {exc.message}[/red]")
    raise typer.Exit(1)


def ensure_privileges(required: bool) -> None:
    """Raise PrivilegeError when root is required but not held."""
    if required and not is_root():
        raise PrivilegeError("This command requires root privileges. Please run with sudo.")

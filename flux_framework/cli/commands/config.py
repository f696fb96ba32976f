"""CLI — View and change configuration values."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from flux_framework.cli.state import console, fail, get_state
from flux_framework.exceptions import FluxError


def config_command(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Key to show or set."),
    value: Optional[str] = typer.Argument(None, help="New value for KEY."),
) -> None:
    """Show all values, show one KEY, or set KEY to VALUE and save."""
    settings = get_state(ctx).settings

    if key is None:
        table = Table(title="Current Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for k, v in settings.all():
            table.add_row(k, v)
        console.print(table)
        return

    if value is None:
        current = settings.get(key)
        if current is None:
            console.print(f"[yellow]Key '{key}' not found[/yellow]")
            raise typer.Exit(1)
        console.print(f"{key} = {current}", markup=False, highlight=False)
        return

    try:
        settings.set(key, value)
        path = settings.save()
    except FluxError as exc:
        fail(exc)
    console.print(f"[green]Set {key} = {value}[/green]")
    console.print(f"Saved to {path}", markup=False, highlight=False)

"""CLI — Module discovery and direct invocation."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from flux_framework import runtime
from flux_framework.cli.state import console, ensure_privileges, fail, get_state
from flux_framework.exceptions import FluxError
from flux_framework.modules.base import HELP_FLAGS


def list_modules() -> None:
    """List all modules and whether they can run on this host."""
    descriptors = runtime.discover_modules(runtime.build_module_registry(console=console))

    table = Table(title="Available Modules")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Available")
    table.add_column("Description")

    for d in descriptors:
        table.add_row(
            d.name,
            d.version,
            "[green]yes[/green]" if d.available else "[red]no[/red]",
            d.description,
        )
    console.print(table)
    console.print(f"Total: {len(descriptors)} modules")


def load_module(
    ctx: typer.Context,
    module: str = typer.Argument(..., help="Module name (see `flux list`)."),
) -> None:
    """Run a single module.  Extra arguments are passed to the module."""
    state = get_state(ctx)
    args = list(ctx.args)
    registry = runtime.build_module_registry(console=console)

    try:
        dry_run = "--dry-run" in args or state.settings.dry_run
        if not dry_run and not any(arg in HELP_FLAGS for arg in args):
            ensure_privileges(registry.resolve(module).REQUIRES_ROOT)
        asyncio.run(registry.invoke(module, args, state.settings))
    except FluxError as exc:
        fail(exc)

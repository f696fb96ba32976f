"""CLI — Host status overview."""

from __future__ import annotations

import asyncio
import socket

import psutil
import typer
from rich.table import Table

from flux_framework import __version__, runtime
from flux_framework.cli.state import console, get_state
from flux_framework.modules.platform import DistroInfo
from flux_framework.system import RebootChecker


def _gib(value: int) -> str:
    return f"{value / 1024 ** 3:.1f} GiB"


def show_status(ctx: typer.Context) -> None:
    """Show host, resource and module status."""
    state = get_state(ctx)
    distro = DistroInfo.detect()
    memory = psutil.virtual_memory()
    disk = psutil.disk_usage("/")
    load1, load5, load15 = psutil.getloadavg()
    reboot = asyncio.run(RebootChecker().check())
    modules = runtime.build_module_registry(console=console).status_report()

    table = Table(title=f"Flux {__version__} — System Status", show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value")
    table.add_row("Hostname", socket.gethostname())
    table.add_row("Distribution", distro.name)
    table.add_row("Kernel", distro.kernel)
    table.add_row("Architecture", distro.architecture)
    table.add_row("Load average", f"{load1:.2f} {load5:.2f} {load15:.2f}")
    table.add_row(
        "Memory", f"{_gib(memory.used)} / {_gib(memory.total)} ({memory.percent:.0f}%)"
    )
    table.add_row("Disk /", f"{_gib(disk.used)} / {_gib(disk.total)} ({disk.percent:.0f}%)")
    table.add_row("Mode", state.settings.general.mode)
    table.add_row(
        "Modules",
        f"{len(modules['available'])} available, {len(modules['unavailable'])} unavailable",
    )
    table.add_row("Reboot required", "[yellow]yes[/yellow]" if reboot else "no")
    console.print(table)

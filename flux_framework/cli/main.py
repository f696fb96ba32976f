"""Flux CLI — Entry point.

Usage:
    flux list
    flux load <module> [-- module args...]
    flux workflow <name> [--yes]
    flux workflows
    flux config [key] [value]
    flux status
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from flux_framework import __version__
from flux_framework.cli.commands import config, modules, status, workflows
from flux_framework.cli.state import CliState, console, fail
from flux_framework.config import Settings
from flux_framework.exceptions import FluxError
from flux_framework.logging import configure_logging

app = typer.Typer(
    name="flux",
    help="Flux — modular Linux system configuration and hardening framework.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

app.command("list")(modules.list_modules)
app.command(
    "load",
    # Module arguments, --help included, are passed through untouched.
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(modules.load_module)
app.command("workflow")(workflows.run_workflow)
app.command("workflows")(workflows.list_workflows)
app.command("config")(config.config_command)
app.command("status")(status.show_status)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"flux {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Annotated[
        Optional[Path], typer.Option("--config", "-c", help="Path to flux.yaml.")
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", "-L", help="Override the log level.")
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version."),
    ] = False,
) -> None:
    try:
        settings = Settings.load(config_file=config_file)
    except FluxError as exc:
        fail(exc)

    configure_logging(
        level=log_level or settings.general.log_level,
        format=settings.logging.format,
        log_file=str(settings.logging.file) if settings.logging.file else None,
    )
    ctx.obj = CliState(settings=settings)


if __name__ == "__main__":
    app()

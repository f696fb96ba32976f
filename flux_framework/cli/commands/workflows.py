"""CLI — Workflow listing and execution."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from flux_framework import runtime
from flux_framework.cli.state import console, ensure_privileges, fail, get_state
from flux_framework.exceptions import FluxError
from flux_framework.workflows.manager import RunStatus, WorkflowManager


def list_workflows(ctx: typer.Context) -> None:
    """List built-in and configured workflows."""
    state = get_state(ctx)
    registry = runtime.build_workflow_registry(state.settings)

    table = Table(title="Available Workflows")
    table.add_column("Name", style="cyan")
    table.add_column("Modules")
    table.add_column("Description")
    for name, description in registry.list():
        workflow = registry.resolve(name)
        table.add_row(name, ", ".join(workflow.modules), description)
    console.print(table)


def run_workflow(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Workflow name (see `flux workflows`)."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer every prompt with its default."),
) -> None:
    """Run a workflow: show the plan, confirm, then run each module in order."""
    state = get_state(ctx)
    settings = state.settings
    module_registry = runtime.build_module_registry(console=console)
    workflow_registry = runtime.build_workflow_registry(settings)

    try:
        workflow = workflow_registry.resolve(name)
        ensure_privileges(
            not settings.dry_run
            and any(
                module_registry.resolve(m).REQUIRES_ROOT
                for m in workflow.modules
                if m in module_registry
            )
        )
        manager = WorkflowManager(
            module_registry=module_registry,
            workflow_registry=workflow_registry,
            confirmer=runtime.default_confirmer(settings, assume_yes=yes, console=console),
            console=console,
        )
        report = asyncio.run(manager.run_workflow(name, settings))
    except FluxError as exc:
        fail(exc)

    if report.status == RunStatus.CANCELLED:
        console.print("Workflow execution cancelled")
        return
    if report.summary and report.summary.failed:
        raise typer.Exit(1)

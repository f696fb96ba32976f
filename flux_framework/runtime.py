"""Flux — Startup wiring.

Builds the two registries once per process and exposes the two calls the
CLI needs: :func:`discover_modules` and :func:`run_workflow`.  Both return
structured results; turning them into tables is the caller's job.
"""

from __future__ import annotations

from rich.console import Console

from flux_framework.config import Settings
from flux_framework.interaction import AutoConfirmer, Confirmer, ConsoleConfirmer
from flux_framework.modules.builtin import BUILTIN_MODULES
from flux_framework.modules.descriptor import ModuleDescriptor
from flux_framework.modules.platform import DistroGuard
from flux_framework.modules.registry import ModuleRegistry
from flux_framework.workflows.builtin import BUILTIN_WORKFLOWS, workflows_from_settings
from flux_framework.workflows.manager import WorkflowManager, WorkflowReport
from flux_framework.workflows.registry import WorkflowRegistry


def build_module_registry(
    console: Console | None = None, guard: DistroGuard | None = None
) -> ModuleRegistry:
    registry = ModuleRegistry(console=console)
    for module_class in BUILTIN_MODULES:
        registry.register(module_class(guard=guard))
    return registry


def build_workflow_registry(settings: Settings) -> WorkflowRegistry:
    registry = WorkflowRegistry()
    for workflow in BUILTIN_WORKFLOWS:
        registry.register(workflow)
    for workflow in workflows_from_settings(settings):
        registry.register(workflow)
    return registry


def default_confirmer(
    settings: Settings, assume_yes: bool = False, console: Console | None = None
) -> Confirmer:
    if assume_yes or settings.general.mode == "auto":
        return AutoConfirmer()
    return ConsoleConfirmer(console)


def discover_modules(registry: ModuleRegistry | None = None) -> list[ModuleDescriptor]:
    return (registry or build_module_registry()).discover()


async def run_workflow(
    name: str,
    settings: Settings,
    confirmer: Confirmer | None = None,
    console: Console | None = None,
) -> WorkflowReport:
    manager = WorkflowManager(
        module_registry=build_module_registry(console=console),
        workflow_registry=build_workflow_registry(settings),
        confirmer=confirmer or default_confirmer(settings, console=console),
        console=console,
    )
    return await manager.run_workflow(name, settings)

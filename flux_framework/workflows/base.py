"""Workflow layer — Workflow descriptor and sequential executor.

``BaseWorkflow.execute_modules`` drives one run of a workflow:

    for each module name, in list order:
      1. Resolve the module (a missing name aborts the whole run)
      2. Unavailable on this host       -> skipped, no prompt
      3. Operator declines "Execute X?" -> skipped
      4. Invoke through the registry
           ok    -> completed
           error -> failed, then ask "Continue with remaining modules?"
                    and stop on "no"
    print the completed / failed / skipped summary

Modules run strictly one after another; module ``i + 1`` starts only after
module ``i`` has returned.  Nothing is rolled back: side effects of completed
modules stay in place when a later module fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from rich.console import Console

from flux_framework.logging import bind_run_context, clear_module_context, get_logger

if TYPE_CHECKING:
    from flux_framework.config import Settings
    from flux_framework.interaction import Confirmer
    from flux_framework.modules.registry import ModuleRegistry

log = get_logger(__name__)


@dataclass(frozen=True)
class Workflow:
    """A named, ordered list of module names."""

    name: str
    description: str
    modules: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", tuple(self.modules))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "modules": list(self.modules),
        }


class OutcomeStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ModuleOutcome:
    module: str
    status: OutcomeStatus
    reason: str = ""


@dataclass
class RunSummary:
    """Outcome counters for one workflow run."""

    completed: int = 0
    failed: int = 0
    skipped: int = 0
    aborted: bool = False
    outcomes: list[ModuleOutcome] = field(default_factory=list)

    def record(self, module: str, status: OutcomeStatus, reason: str = "") -> None:
        if status == OutcomeStatus.COMPLETED:
            self.completed += 1
        elif status == OutcomeStatus.FAILED:
            self.failed += 1
        else:
            self.skipped += 1
        self.outcomes.append(ModuleOutcome(module=module, status=status, reason=reason))

    def to_dict(self) -> dict[str, Any]:
        return {
            "completed": self.completed,
            "failed": self.failed,
            "skipped": self.skipped,
            "aborted": self.aborted,
            "outcomes": [
                {"module": o.module, "status": o.status.value, "reason": o.reason}
                for o in self.outcomes
            ],
        }


class BaseWorkflow:
    """Runs a workflow's modules in order against a module registry.

    Usage::

        summary = await BaseWorkflow(workflow).execute_modules(
            registry, settings, ConsoleConfirmer()
        )
    """

    def __init__(self, workflow: Workflow, console: Console | None = None) -> None:
        self._workflow = workflow
        self._console = console or Console()

    async def execute_modules(
        self,
        registry: "ModuleRegistry",
        config: "Settings",
        confirmer: "Confirmer",
    ) -> RunSummary:
        """Run every module of the workflow and return the outcome counters.

        Raises:
            ModuleNotFoundError: A module name is not registered.  No summary
                is produced.
            PromptError: The confirmer could not get an answer.
        """
        summary = RunSummary()
        names = self._workflow.modules
        total = len(names)

        try:
            for index, name in enumerate(names, start=1):
                bind_run_context(workflow=self._workflow.name, module=name)
                self._console.print(f"\n[bold][{index}/{total}] Module: {name}[/bold]")

                module = registry.resolve(name)
                if not module.is_available():
                    log.warning("module_unavailable", module=name)
                    summary.record(name, OutcomeStatus.SKIPPED, "not available on this system")
                    continue

                if not confirmer.confirm(f"Execute {name} module?", True):
                    log.info("module_declined", module=name)
                    summary.record(name, OutcomeStatus.SKIPPED, "declined by operator")
                    continue

                try:
                    await registry.invoke(name, [], config)
                except Exception as exc:
                    log.warning("module_failed", module=name, error=str(exc))
                    summary.record(name, OutcomeStatus.FAILED, str(exc))
                    if not confirmer.confirm("Continue with remaining modules?", True):
                        summary.aborted = True
                        log.warning("workflow_aborted", after_module=name)
                        break
                    continue

                log.info("module_completed", module=name)
                summary.record(name, OutcomeStatus.COMPLETED)
        finally:
            clear_module_context()

        self.print_summary(summary)
        return summary

    def print_summary(self, summary: RunSummary) -> None:
        self._console.print("\n[bold cyan]=== Workflow Summary ===[/bold cyan]")
        self._console.print(f"[green]✓ Completed: {summary.completed}[/green]")
        if summary.failed:
            self._console.print(f"[red]✗ Failed: {summary.failed}[/red]")
        if summary.skipped:
            self._console.print(f"[yellow]○ Skipped: {summary.skipped}[/yellow]")

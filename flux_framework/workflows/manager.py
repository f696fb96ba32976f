"""Workflow layer — Workflow dispatch.

``WorkflowManager.run_workflow`` is the single entry point for running a
workflow by name:

  1. Resolve the workflow (unknown name -> WorkflowNotFoundError)
  2. Show the plan: name, description, numbered module list
  3. Ask "Continue with workflow execution?"; a "no" is a normal return
     with status ``cancelled``, not an error
  4. Run the modules through :class:`BaseWorkflow`
  5. Ask the reboot checker whether a reboot is now needed.  This is
     advisory only; a failing check is logged and reported as unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from rich.console import Console

from flux_framework.logging import bind_run_context, clear_run_context, get_logger
from flux_framework.system import RebootChecker
from flux_framework.workflows.base import BaseWorkflow, RunSummary, Workflow

if TYPE_CHECKING:
    from flux_framework.config import Settings
    from flux_framework.interaction import Confirmer
    from flux_framework.modules.registry import ModuleRegistry
    from flux_framework.workflows.registry import WorkflowRegistry

log = get_logger(__name__)


class RunStatus(str, Enum):
    CANCELLED = "cancelled"
    FINISHED = "finished"


@dataclass
class WorkflowReport:
    workflow: Workflow
    status: RunStatus
    summary: RunSummary | None = None
    reboot_required: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "workflow": self.workflow.name,
            "status": self.status.value,
            "summary": self.summary.to_dict() if self.summary else None,
            "reboot_required": self.reboot_required,
        }


class WorkflowManager:
    """Resolves workflows by name and runs them.

    Usage::

        manager = WorkflowManager(module_registry, workflow_registry, ConsoleConfirmer())
        report = await manager.run_workflow("essential", settings)
    """

    def __init__(
        self,
        module_registry: "ModuleRegistry",
        workflow_registry: "WorkflowRegistry",
        confirmer: "Confirmer",
        reboot_checker: RebootChecker | None = None,
        console: Console | None = None,
    ) -> None:
        self._modules = module_registry
        self._workflows = workflow_registry
        self._confirmer = confirmer
        self._reboot_checker = reboot_checker or RebootChecker()
        self._console = console or Console()

    def list_workflows(self) -> list[tuple[str, str]]:
        return self._workflows.list()

    async def run_workflow(self, name: str, config: "Settings") -> WorkflowReport:
        """Run workflow *name* and return what happened.

        Raises:
            WorkflowNotFoundError: *name* is not registered.
            ModuleNotFoundError:   The workflow lists a module that is not
                                   registered; the run stops at that step.
            PromptError:           The confirmer could not get an answer.
        """
        workflow = self._workflows.resolve(name)
        bind_run_context(workflow=workflow.name)
        log.info("workflow_started", workflow=workflow.name)

        try:
            self._print_plan(workflow)
            if not self._confirmer.confirm("Continue with workflow execution?", True):
                log.info("workflow_cancelled", workflow=workflow.name)
                return WorkflowReport(workflow=workflow, status=RunStatus.CANCELLED)

            executor = BaseWorkflow(workflow, console=self._console)
            summary = await executor.execute_modules(self._modules, config, self._confirmer)
            log.info(
                "workflow_finished",
                workflow=workflow.name,
                completed=summary.completed,
                failed=summary.failed,
                skipped=summary.skipped,
            )

            reboot_required = await self._check_reboot()
            return WorkflowReport(
                workflow=workflow,
                status=RunStatus.FINISHED,
                summary=summary,
                reboot_required=reboot_required,
            )
        finally:
            clear_run_context()

    def _print_plan(self, workflow: Workflow) -> None:
        self._console.print(f"[bold cyan]=== Workflow: {workflow.name} ===[/bold cyan]")
        self._console.print(workflow.description)
        self._console.print()
        self._console.print("This workflow will execute the following modules:")
        for index, module in enumerate(workflow.modules, start=1):
            self._console.print(f"  {index}. {module}")
        self._console.print()

    async def _check_reboot(self) -> bool | None:
        try:
            required = await self._reboot_checker.check()
        except Exception as exc:
            log.warning("reboot_check_failed", error=str(exc))
            return None

        if required:
            log.warning("reboot_required")
            self._console.print("[yellow]⚠ System reboot is required[/yellow]")
            self._console.print(
                "[yellow]Remember to reboot later to complete the configuration[/yellow]"
            )
        else:
            log.info("reboot_not_required")
        return required

"""Workflow layer — Workflow registry.

Holds named workflows, built once at startup.  Like the module registry,
a second registration under the same name silently replaces the first
(after a warning in the log); config-defined workflows rely on this to
redefine built-ins.
"""

from __future__ import annotations

from flux_framework.exceptions import WorkflowNotFoundError
from flux_framework.logging import get_logger
from flux_framework.workflows.base import Workflow

log = get_logger(__name__)


class WorkflowRegistry:
    def __init__(self) -> None:
        self._workflows: dict[str, Workflow] = {}

    def register(self, workflow: Workflow) -> None:
        if not workflow.name:
            raise ValueError("Workflow has no name.")
        if workflow.name in self._workflows:
            log.warning("workflow_already_registered", workflow=workflow.name)
        self._workflows[workflow.name] = workflow
        log.debug("workflow_registered", workflow=workflow.name, modules=list(workflow.modules))

    def resolve(self, name: str) -> Workflow:
        """Return the workflow registered as *name*.

        Raises:
            WorkflowNotFoundError: No workflow with this name is registered.
        """
        try:
            return self._workflows[name]
        except KeyError:
            raise WorkflowNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._workflows

    def __len__(self) -> int:
        return len(self._workflows)

    def list(self) -> list[tuple[str, str]]:
        """Return ``(name, description)`` pairs sorted by name."""
        return sorted((w.name, w.description) for w in self._workflows.values())

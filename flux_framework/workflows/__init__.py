"""Workflow layer — descriptors, sequential executor, registry, dispatch."""

from flux_framework.workflows.base import (
    BaseWorkflow,
    ModuleOutcome,
    OutcomeStatus,
    RunSummary,
    Workflow,
)
from flux_framework.workflows.manager import RunStatus, WorkflowManager, WorkflowReport
from flux_framework.workflows.registry import WorkflowRegistry

__all__ = [
    "BaseWorkflow",
    "ModuleOutcome",
    "OutcomeStatus",
    "RunSummary",
    "Workflow",
    "RunStatus",
    "WorkflowManager",
    "WorkflowReport",
    "WorkflowRegistry",
]

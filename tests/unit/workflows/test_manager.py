"""Unit tests — WorkflowManager dispatch, cancellation and reboot check."""

from __future__ import annotations

import pytest
from conftest import FakeRebootChecker, RecordingModule, ScriptedConfirmer, output_of

from flux_framework.config import Settings
from flux_framework.exceptions import ModuleNotFoundError, WorkflowNotFoundError
from flux_framework.workflows.base import Workflow
from flux_framework.workflows.manager import RunStatus, WorkflowManager
from flux_framework.workflows.registry import WorkflowRegistry


@pytest.fixture
def workflow_registry() -> WorkflowRegistry:
    registry = WorkflowRegistry()
    registry.register(Workflow(name="pair", description="Two modules", modules=("a", "b")))
    registry.register(Workflow(name="broken", description="Has a typo", modules=("a", "nope")))
    return registry


@pytest.fixture
def populated(module_registry, call_order):
    module_registry.register(RecordingModule("a", order=call_order))
    module_registry.register(RecordingModule("b", order=call_order))
    return module_registry


def _manager(populated, workflow_registry, confirmer, console, reboot=None) -> WorkflowManager:
    return WorkflowManager(
        module_registry=populated,
        workflow_registry=workflow_registry,
        confirmer=confirmer,
        reboot_checker=reboot or FakeRebootChecker(),
        console=console,
    )


@pytest.mark.unit
class TestRunWorkflow:
    async def test_finished_report(
        self, populated, workflow_registry, test_settings: Settings, call_order, console
    ) -> None:
        confirmer = ScriptedConfirmer()
        report = await _manager(populated, workflow_registry, confirmer, console).run_workflow(
            "pair", test_settings
        )

        assert report.status == RunStatus.FINISHED
        assert report.summary.completed == 2
        assert report.reboot_required is False
        assert call_order == ["a", "b"]
        assert confirmer.prompts[0] == "Continue with workflow execution?"

    async def test_plan_printed_before_prompt(
        self, populated, workflow_registry, test_settings: Settings, console
    ) -> None:
        await _manager(populated, workflow_registry, ScriptedConfirmer(False), console).run_workflow(
            "pair", test_settings
        )
        out = output_of(console)
        assert "=== Workflow: pair ===" in out
        assert "Two modules" in out
        assert "  1. a" in out
        assert "  2. b" in out

    async def test_cancel_runs_nothing(
        self, populated, workflow_registry, test_settings: Settings, call_order, console
    ) -> None:
        reboot = FakeRebootChecker()
        report = await _manager(
            populated, workflow_registry, ScriptedConfirmer(False), console, reboot
        ).run_workflow("pair", test_settings)

        assert report.status == RunStatus.CANCELLED
        assert report.summary is None
        assert call_order == []
        assert reboot.calls == 0

    async def test_unknown_workflow(
        self, populated, workflow_registry, test_settings: Settings, console
    ) -> None:
        confirmer = ScriptedConfirmer()
        with pytest.raises(WorkflowNotFoundError):
            await _manager(populated, workflow_registry, confirmer, console).run_workflow(
                "nope", test_settings
            )
        assert confirmer.prompts == []

    async def test_missing_module_is_fatal(
        self, populated, workflow_registry, test_settings: Settings, call_order, console
    ) -> None:
        reboot = FakeRebootChecker()
        with pytest.raises(ModuleNotFoundError):
            await _manager(
                populated, workflow_registry, ScriptedConfirmer(), console, reboot
            ).run_workflow("broken", test_settings)
        assert call_order == ["a"]
        assert reboot.calls == 0

    async def test_reboot_required_warns(
        self, populated, workflow_registry, test_settings: Settings, console
    ) -> None:
        report = await _manager(
            populated, workflow_registry, ScriptedConfirmer(), console, FakeRebootChecker(True)
        ).run_workflow("pair", test_settings)
        assert report.reboot_required is True
        assert "System reboot is required" in output_of(console)

    async def test_reboot_check_failure_is_not_fatal(
        self, populated, workflow_registry, test_settings: Settings, console
    ) -> None:
        reboot = FakeRebootChecker(error=OSError("no /var/run"))
        report = await _manager(
            populated, workflow_registry, ScriptedConfirmer(), console, reboot
        ).run_workflow("pair", test_settings)
        assert report.status == RunStatus.FINISHED
        assert report.reboot_required is None

    async def test_report_to_dict(
        self, populated, workflow_registry, test_settings: Settings, console
    ) -> None:
        report = await _manager(
            populated, workflow_registry, ScriptedConfirmer(), console
        ).run_workflow("pair", test_settings)
        data = report.to_dict()
        assert data["workflow"] == "pair"
        assert data["status"] == "finished"
        assert data["summary"]["completed"] == 2

    def test_list_workflows(self, populated, workflow_registry, console) -> None:
        manager = _manager(populated, workflow_registry, ScriptedConfirmer(), console)
        assert [name for name, _ in manager.list_workflows()] == ["broken", "pair"]

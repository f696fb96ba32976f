"""Unit tests — WorkflowRegistry and the built-in workflow set."""

from __future__ import annotations

import pytest

from flux_framework.config import Settings
from flux_framework.exceptions import WorkflowNotFoundError
from flux_framework.modules.builtin import BUILTIN_MODULES
from flux_framework.runtime import build_workflow_registry
from flux_framework.workflows.base import Workflow
from flux_framework.workflows.builtin import BUILTIN_WORKFLOWS, ESSENTIAL, workflows_from_settings
from flux_framework.workflows.registry import WorkflowRegistry


@pytest.mark.unit
class TestWorkflowRegistry:
    def test_register_resolve(self) -> None:
        registry = WorkflowRegistry()
        registry.register(ESSENTIAL)
        assert registry.resolve("essential") is ESSENTIAL
        assert "essential" in registry

    def test_unknown(self) -> None:
        with pytest.raises(WorkflowNotFoundError) as exc_info:
            WorkflowRegistry().resolve("ghost")
        assert exc_info.value.workflow_name == "ghost"

    def test_duplicate_last_wins(self) -> None:
        registry = WorkflowRegistry()
        registry.register(Workflow(name="x", description="first", modules=()))
        registry.register(Workflow(name="x", description="second", modules=()))
        assert registry.resolve("x").description == "second"
        assert len(registry) == 1

    def test_list_sorted(self) -> None:
        registry = WorkflowRegistry()
        for workflow in BUILTIN_WORKFLOWS:
            registry.register(workflow)
        names = [name for name, _ in registry.list()]
        assert names == ["complete", "development", "essential", "monitoring", "security"]


@pytest.mark.unit
class TestBuiltinWorkflows:
    def test_essential_order(self) -> None:
        assert ESSENTIAL.modules == (
            "hostname",
            "network",
            "timezone",
            "update",
            "certs",
            "sysctl",
            "ssh",
        )

    def test_only_reference_builtin_modules(self) -> None:
        known = {cls.MODULE_ID for cls in BUILTIN_MODULES}
        for workflow in BUILTIN_WORKFLOWS:
            assert set(workflow.modules) <= known, workflow.name


@pytest.mark.unit
class TestConfigWorkflows:
    def test_from_settings(self) -> None:
        settings = Settings(workflows={"web": {"description": "Web box", "modules": ["ssh", "certs"]}})
        [workflow] = workflows_from_settings(settings)
        assert workflow.name == "web"
        assert workflow.modules == ("ssh", "certs")

    def test_default_description(self) -> None:
        settings = Settings(workflows={"web": {"modules": ["ssh"]}})
        assert "web" in workflows_from_settings(settings)[0].description

    def test_config_overrides_builtin(self) -> None:
        settings = Settings(workflows={"security": {"description": "Mine", "modules": ["ssh"]}})
        registry = build_workflow_registry(settings)
        assert registry.resolve("security").modules == ("ssh",)
        assert len(registry) == len(BUILTIN_WORKFLOWS)

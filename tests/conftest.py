"""Shared pytest fixtures for the flux-framework test suite."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from flux_framework.config import Settings, override_settings
from flux_framework.modules.base import BaseModule
from flux_framework.modules.platform import DistroGuard, DistroInfo
from flux_framework.modules.registry import ModuleRegistry


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class ScriptedConfirmer:
    """Answers prompts from a queue; falls back to the prompt's default."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def confirm(self, prompt: str, default: bool) -> bool:
        self.prompts.append(prompt)
        if self.answers:
            return self.answers.pop(0)
        return default


class RecordingModule(BaseModule):
    """In-memory module that records its calls."""

    DESCRIPTION = "Recording test module"
    VERSION = "0.1.0"
    REQUIRES_ROOT = False

    def __init__(
        self,
        name: str,
        available: bool = True,
        fail: bool = False,
        order: list[str] | None = None,
    ) -> None:
        self._name = name
        self.available = available
        self.fail = fail
        self.order = order if order is not None else []
        self.calls: list[list[str]] = []
        self.seen_configs: list[Settings] = []

    def name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self.available

    async def execute(self, args: list[str], config: Settings) -> None:
        self.calls.append(list(args))
        self.seen_configs.append(config)
        self.order.append(self._name)
        if self.fail:
            raise RuntimeError(f"{self._name} exploded")


class FakeRebootChecker:
    def __init__(self, required: bool = False, error: Exception | None = None) -> None:
        self.required = required
        self.error = error
        self.calls = 0

    async def check(self) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.required


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    settings = Settings(general={"mode": "interactive", "log_level": "debug"})
    settings._config_path = tmp_path / "flux.yaml"
    override_settings(settings)
    return settings


@pytest.fixture
def isolated_config_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the system and user config locations into tmp_path."""
    monkeypatch.setattr("flux_framework.config.SYSTEM_CONFIG_PATH", tmp_path / "etc-flux.yaml")
    monkeypatch.setattr(
        "flux_framework.config.user_config_path", lambda: tmp_path / "user-flux.yaml"
    )
    return tmp_path


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def output_of(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_distro_cache():
    DistroInfo.reset_cache()
    yield
    DistroInfo.reset_cache()


@pytest.fixture
def call_order() -> list[str]:
    return []


@pytest.fixture
def module_registry(console: Console) -> ModuleRegistry:
    return ModuleRegistry(console=console)


@pytest.fixture
def debian_guard() -> DistroGuard:
    return DistroGuard(
        DistroInfo(id="ubuntu", name="Ubuntu 24.04 LTS", version="24.04", families=frozenset({"debian"}))
    )


@pytest.fixture
def rhel_guard() -> DistroGuard:
    return DistroGuard(
        DistroInfo(id="rocky", name="Rocky Linux 9", version="9.4", families=frozenset({"rhel"}))
    )

"""Unit tests — structured logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from flux_framework.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)
    clear_run_context()


@pytest.mark.unit
class TestConfigureLogging:
    def test_json_file_output_carries_run_context(self, tmp_path: Path) -> None:
        log_file = tmp_path / "flux.log"
        configure_logging(level="info", format="json", log_file=str(log_file))

        bind_run_context(workflow="essential", module="ssh")
        get_logger("flux.test").info("module_started", attempt=1)

        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["event"] == "module_started"
        assert record["workflow"] == "essential"
        assert record["module"] == "ssh"
        assert record["level"] == "info"

    def test_level_filters(self, tmp_path: Path) -> None:
        log_file = tmp_path / "flux.log"
        configure_logging(level="warning", format="json", log_file=str(log_file))
        get_logger("flux.test").info("quiet")
        get_logger("flux.test").warning("loud")
        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert events == ["loud"]

    def test_clear_run_context(self, tmp_path: Path) -> None:
        log_file = tmp_path / "flux.log"
        configure_logging(level="info", format="json", log_file=str(log_file))
        bind_run_context(workflow="essential")
        clear_run_context()
        get_logger("flux.test").info("after")
        assert "workflow" not in json.loads(log_file.read_text().splitlines()[-1])

"""Unit tests — confirmation providers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from flux_framework.config import Settings
from flux_framework.exceptions import PromptError
from flux_framework.interaction import AutoConfirmer, ConsoleConfirmer
from flux_framework.runtime import default_confirmer


@pytest.mark.unit
class TestAutoConfirmer:
    @pytest.mark.parametrize("default", [True, False])
    def test_returns_default(self, default: bool) -> None:
        assert AutoConfirmer().confirm("Proceed?", default) is default


@pytest.mark.unit
class TestConsoleConfirmer:
    def test_delegates_to_rich_prompt(self, console) -> None:
        with patch("flux_framework.interaction.Confirm.ask", return_value=False) as ask:
            assert ConsoleConfirmer(console).confirm("Proceed?", True) is False
        ask.assert_called_once_with("Proceed?", default=True, console=console)

    @pytest.mark.parametrize("error", [EOFError(), KeyboardInterrupt()])
    def test_no_answer_raises_prompt_error(self, console, error) -> None:
        with patch("flux_framework.interaction.Confirm.ask", side_effect=error):
            with pytest.raises(PromptError):
                ConsoleConfirmer(console).confirm("Proceed?", True)


@pytest.mark.unit
class TestDefaultConfirmer:
    def test_interactive(self) -> None:
        assert isinstance(default_confirmer(Settings()), ConsoleConfirmer)

    def test_assume_yes(self) -> None:
        assert isinstance(default_confirmer(Settings(), assume_yes=True), AutoConfirmer)

    def test_auto_mode(self) -> None:
        settings = Settings(general={"mode": "auto"})
        assert isinstance(default_confirmer(settings), AutoConfirmer)

"""Flux — Operator confirmation.

The workflow executor never reads from the terminal itself.  It asks a
:class:`Confirmer` and acts on the boolean answer, which lets the CLI pick an
interactive or unattended provider and lets tests script the answers.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.prompt import Confirm

from flux_framework.exceptions import PromptError
from flux_framework.logging import get_logger

log = get_logger(__name__)


class Confirmer(Protocol):
    def confirm(self, prompt: str, default: bool) -> bool:
        """Return the operator's yes/no answer to *prompt*.

        Raises:
            PromptError: No answer could be obtained.
        """
        ...


class ConsoleConfirmer:
    """Asks on the terminal with rich's ``[y/n]`` prompt."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def confirm(self, prompt: str, default: bool) -> bool:
        try:
            return Confirm.ask(prompt, default=default, console=self._console)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptError(
                f"No answer to prompt: {prompt}", context={"prompt": prompt}
            ) from exc


class AutoConfirmer:
    """Answers every prompt with its default (``--yes`` / ``mode: auto``)."""

    def confirm(self, prompt: str, default: bool) -> bool:
        log.debug("prompt_auto_answered", prompt=prompt, answer=default)
        return default

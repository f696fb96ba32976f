"""Module layer — Step-list modules.

Most built-in modules boil down to "write these files, then run these
commands".  ``CommandModule`` lets them declare exactly that:

    class TimezoneModule(CommandModule):
        MODULE_ID = "timezone"
        REQUIRED_COMMANDS = ("timedatectl",)

        def plan(self, ctx):
            tz = ctx.config.module_config("timezone").get("timezone", "UTC")
            return [RunStep(["timedatectl", "set-timezone", tz])]

Steps run strictly in order and the first failing step aborts the module.
Under ``--dry-run`` every step is logged and nothing is executed.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Union

from flux_framework.logging import get_logger
from flux_framework.modules.base import BaseModule, ModuleContext
from flux_framework.modules.platform import DistroGuard
from flux_framework.system import command_exists, run_command, write_config_file

if TYPE_CHECKING:
    from flux_framework.config import Settings

log = get_logger(__name__)


@dataclass(frozen=True)
class RunStep:
    command: list[str]
    check: bool = True

    def describe(self) -> str:
        return "run: " + " ".join(self.command)


@dataclass(frozen=True)
class WriteStep:
    path: Path
    content: str
    mode: int = 0o644

    def describe(self) -> str:
        return f"write: {self.path}"


Step = Union[RunStep, WriteStep]


class CommandModule(BaseModule):
    """Module whose work is an ordered list of file writes and commands."""

    REQUIRED_COMMANDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, guard: DistroGuard | None = None) -> None:
        self._guard = guard

    def _distro_guard(self) -> DistroGuard:
        if self._guard is None:
            self._guard = DistroGuard()
        return self._guard

    def missing_commands(self) -> list[str]:
        return [c for c in self.REQUIRED_COMMANDS if not command_exists(c)]

    def is_available(self) -> bool:
        if self.missing_commands():
            return False
        return self._distro_guard().is_supported(self)

    def help(self) -> str:
        text = super().help()
        if self.REQUIRED_COMMANDS:
            text += "\n\nRequires: " + ", ".join(self.REQUIRED_COMMANDS)
        return text

    @abstractmethod
    def plan(self, ctx: ModuleContext) -> list[Step]:
        """Return the ordered steps for this run."""
        ...

    async def execute(self, args: list[str], config: "Settings") -> None:
        ctx = ModuleContext.from_args(args, config)
        steps = self.plan(ctx)
        log.info("module_plan", module=self.MODULE_ID, steps=len(steps), dry_run=ctx.dry_run)

        for step in steps:
            if ctx.dry_run:
                log.info("step_dry_run", module=self.MODULE_ID, step=step.describe())
                continue
            if ctx.verbose:
                log.info("step_started", module=self.MODULE_ID, step=step.describe())
            if isinstance(step, WriteStep):
                write_config_file(step.path, step.content, step.mode)
            else:
                await run_command(step.command, check=step.check)

"""Zsh module — install zsh and make it the login shell."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.builtin.packages import install_step
from flux_framework.modules.command import CommandModule, RunStep, Step
from flux_framework.system import detect_package_manager


class ZshModule(CommandModule):
    MODULE_ID = "zsh"
    DESCRIPTION = "Zsh shell setup"
    VERSION = "1.0.0"
    TAGS = ("shell", "development")
    REQUIRED_COMMANDS = ("chsh",)

    def is_available(self) -> bool:
        return detect_package_manager() is not None and super().is_available()

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("zsh")
        users = cfg.get("configure_users") or [ctx.config.general.default_admin_user]
        steps: list[Step] = [install_step(["zsh", "git"])]
        steps += [RunStep(["chsh", "-s", "/usr/bin/zsh", user]) for user in users]
        return steps

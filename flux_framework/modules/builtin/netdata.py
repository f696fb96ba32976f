"""Netdata module — monitoring agent install."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.builtin.packages import install_step
from flux_framework.modules.command import CommandModule, RunStep, Step
from flux_framework.system import detect_package_manager


class NetdataModule(CommandModule):
    MODULE_ID = "netdata"
    DESCRIPTION = "Netdata monitoring agent"
    VERSION = "1.0.0"
    TAGS = ("monitoring",)
    REQUIRED_COMMANDS = ("systemctl",)

    def is_available(self) -> bool:
        return detect_package_manager() is not None and super().is_available()

    def plan(self, ctx: ModuleContext) -> list[Step]:
        return [
            install_step(["netdata"]),
            RunStep(["systemctl", "enable", "--now", "netdata"]),
        ]

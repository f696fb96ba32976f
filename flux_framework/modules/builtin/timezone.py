"""Timezone module."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step


class TimezoneModule(CommandModule):
    MODULE_ID = "timezone"
    DESCRIPTION = "Timezone configuration"
    VERSION = "1.0.0"
    TAGS = ("system", "timezone")
    REQUIRED_COMMANDS = ("timedatectl",)

    def plan(self, ctx: ModuleContext) -> list[Step]:
        timezone = ctx.config.module_config("timezone").get("timezone", "UTC")
        return [
            RunStep(["timedatectl", "set-timezone", timezone]),
            RunStep(["timedatectl", "set-ntp", "true"]),
        ]

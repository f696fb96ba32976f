"""Hostname module."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step


class HostnameModule(CommandModule):
    MODULE_ID = "hostname"
    DESCRIPTION = "Hostname and FQDN configuration"
    VERSION = "1.0.0"
    TAGS = ("system", "network")
    REQUIRED_COMMANDS = ("hostnamectl",)

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("hostname")
        name = cfg.get("set_fqdn") or cfg.get("set_hostname")
        if not name:
            return [RunStep(["hostnamectl", "status"])]
        return [RunStep(["hostnamectl", "set-hostname", name])]

"""MOTD module — dynamic login banner script."""

from __future__ import annotations

import shlex
from pathlib import Path

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step, WriteStep

MOTD_SCRIPT = Path("/etc/update-motd.d/99-flux")

_SCRIPT = """#!/bin/sh
# Managed by flux - local changes will be overwritten
{banner}echo "Host:    $(hostname -f)"
echo "Uptime:  $(uptime -p)"
echo "Load:    $(cut -d' ' -f1-3 /proc/loadavg)"
echo "Memory:  $(free -h | awk '/^Mem:/ {{print $3 " / " $2}}')"
echo "Disk /:  $(df -h / | awk 'NR==2 {{print $5 " used"}}')"
[ -f /var/run/reboot-required ] && echo "*** System restart required ***"
"""


def render_motd(banner: str) -> str:
    banner_line = f"echo {shlex.quote(banner)}\n" if banner else ""
    return _SCRIPT.format(banner=banner_line)


class MotdModule(CommandModule):
    MODULE_ID = "motd"
    DESCRIPTION = "Dynamic message of the day"
    VERSION = "1.0.0"
    TAGS = ("system",)
    REQUIRED_COMMANDS = ("run-parts",)
    SUPPORTED_DISTROS = frozenset({"debian"})

    def plan(self, ctx: ModuleContext) -> list[Step]:
        banner = ctx.config.module_config("motd").get("custom_banner", "")
        return [
            WriteStep(MOTD_SCRIPT, render_motd(banner), 0o755),
            RunStep(["run-parts", "--test", str(MOTD_SCRIPT.parent)]),
        ]

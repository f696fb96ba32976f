"""Sysctl module — kernel and network hardening parameters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step, WriteStep

SYSCTL_FILE = Path("/etc/sysctl.d/99-flux-hardening.conf")

HARDENING_DEFAULTS: dict[str, str] = {
    "net.ipv4.ip_forward": "0",
    "net.ipv6.conf.all.forwarding": "0",
    "net.ipv4.conf.all.accept_redirects": "0",
    "net.ipv4.conf.default.accept_redirects": "0",
    "net.ipv4.conf.all.send_redirects": "0",
    "net.ipv4.conf.all.accept_source_route": "0",
    "net.ipv4.icmp_ignore_bogus_error_responses": "1",
    "net.ipv4.tcp_syncookies": "1",
    "net.ipv4.tcp_syn_retries": "2",
    "net.ipv4.tcp_synack_retries": "2",
    "kernel.randomize_va_space": "2",
    "kernel.dmesg_restrict": "1",
    "kernel.kptr_restrict": "2",
    "kernel.sysrq": "0",
    "fs.suid_dumpable": "0",
    "fs.protected_hardlinks": "1",
    "fs.protected_symlinks": "1",
    "fs.protected_fifos": "2",
}


def render_sysctl(cfg: dict[str, Any]) -> str:
    values = dict(HARDENING_DEFAULTS)
    if cfg.get("ignore_icmp_ping", False):
        values["net.ipv4.icmp_echo_ignore_all"] = "1"
    values.update({k: str(v) for k, v in cfg.get("custom", {}).items()})
    lines = ["# Managed by flux - local changes will be overwritten"]
    lines += [f"{key} = {value}" for key, value in sorted(values.items())]
    return "\n".join(lines) + "\n"


class SysctlModule(CommandModule):
    MODULE_ID = "sysctl"
    DESCRIPTION = "Kernel parameter hardening"
    VERSION = "1.0.0"
    TAGS = ("security", "kernel")
    REQUIRED_COMMANDS = ("sysctl",)

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("sysctl")
        return [
            WriteStep(SYSCTL_FILE, render_sysctl(cfg)),
            RunStep(["sysctl", "--system"]),
        ]

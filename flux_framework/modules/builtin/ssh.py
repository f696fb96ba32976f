"""SSH module — sshd hardening through a drop-in file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step, WriteStep

DROP_IN = Path("/etc/ssh/sshd_config.d/99-flux.conf")


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def render_sshd_config(cfg: dict[str, Any], default_port: int) -> str:
    lines = [
        "# Managed by flux - local changes will be overwritten",
        f"Port {cfg.get('port', default_port)}",
        f"PermitRootLogin {_yes_no(not cfg.get('disable_root_login', True))}",
        f"PasswordAuthentication {_yes_no(not cfg.get('disable_password_auth', True))}",
        "PubkeyAuthentication yes",
        f"PermitEmptyPasswords {_yes_no(cfg.get('permit_empty_passwords', False))}",
        f"MaxAuthTries {cfg.get('max_auth_tries', 3)}",
        f"MaxSessions {cfg.get('max_sessions', 10)}",
        f"LoginGraceTime {cfg.get('login_grace_time', 60)}",
        f"ClientAliveInterval {cfg.get('client_alive_interval', 300)}",
        f"ClientAliveCountMax {cfg.get('client_alive_count_max', 3)}",
        f"X11Forwarding {_yes_no(cfg.get('x11_forwarding', False))}",
        f"AllowTcpForwarding {_yes_no(cfg.get('tcp_forwarding', False))}",
        f"AllowAgentForwarding {_yes_no(cfg.get('agent_forwarding', False))}",
    ]
    if cfg.get("allowed_users"):
        lines.append("AllowUsers " + " ".join(cfg["allowed_users"]))
    if cfg.get("allowed_groups"):
        lines.append("AllowGroups " + " ".join(cfg["allowed_groups"]))
    return "\n".join(lines) + "\n"


def ssh_service_name() -> str:
    # Debian ships the unit as ssh.service, everything else as sshd.service.
    return "ssh" if Path("/lib/systemd/system/ssh.service").exists() else "sshd"


class SshModule(CommandModule):
    MODULE_ID = "ssh"
    DESCRIPTION = "SSH server hardening"
    VERSION = "1.0.0"
    TAGS = ("security", "ssh")
    REQUIRED_COMMANDS = ("sshd", "systemctl")

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("ssh")
        content = render_sshd_config(cfg, ctx.config.general.default_ssh_port)
        return [
            WriteStep(DROP_IN, content),
            RunStep(["sshd", "-t"]),
            RunStep(["systemctl", "reload", ssh_service_name()]),
        ]

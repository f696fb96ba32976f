"""Workflow layer — Built-in workflows and config-defined ones."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flux_framework.workflows.base import Workflow

if TYPE_CHECKING:
    from flux_framework.config import Settings

ESSENTIAL = Workflow(
    name="essential",
    description=(
        "Basic system setup including hostname, network, timezone, updates, "
        "certificates, system hardening, and SSH configuration"
    ),
    modules=("hostname", "network", "timezone", "update", "certs", "sysctl", "ssh"),
)

COMPLETE = Workflow(
    name="complete",
    description="Full system provisioning (essential + extras)",
    modules=(
        "update",
        "hostname",
        "network",
        "user",
        "ssh",
        "firewall",
        "sysctl",
        "certs",
        "zsh",
        "motd",
        "netdata",
    ),
)

SECURITY = Workflow(
    name="security",
    description="Security hardening: updates, SSH, firewall, sysctl, certificates",
    modules=("update", "ssh", "firewall", "sysctl", "certs"),
)

DEVELOPMENT = Workflow(
    name="development",
    description="Development environment setup: user creation, ZSH, and development tools",
    modules=("user", "zsh", "certs"),
)

MONITORING = Workflow(
    name="monitoring",
    description="Monitoring stack: Netdata with certificates and firewall rules",
    modules=("update", "netdata", "certs", "firewall"),
)

BUILTIN_WORKFLOWS: tuple[Workflow, ...] = (
    ESSENTIAL,
    COMPLETE,
    SECURITY,
    DEVELOPMENT,
    MONITORING,
)


def workflows_from_settings(settings: "Settings") -> list[Workflow]:
    """Build the workflows declared under ``workflows:`` in the config file."""
    return [
        Workflow(
            name=name,
            description=block.description or f"User-defined workflow '{name}'",
            modules=tuple(block.modules),
        )
        for name, block in settings.workflows.items()
    ]

"""Flux — Modular Linux system configuration and hardening framework.

Flux runs pluggable *modules* (network, firewall, SSH hardening, sysctl,
certificates, users, shell setup, MOTD, monitoring, updates) either one at a
time or composed into named *workflows* that run several modules in order
with per-step confirmation.

Layers (bottom to top):
    1. Config / logging / exceptions — pydantic settings, structlog, FluxError
    2. Modules   — BaseModule contract, registry, distro guard, built-ins
    3. Workflows — descriptors, sequential executor, registry, dispatch
    4. CLI       — Typer commands rendering with rich
"""

__version__ = "3.0.0"
__author__ = "Flux Contributors"
__license__ = "MIT"

from flux_framework.exceptions import FluxError
from flux_framework.modules.base import BaseModule
from flux_framework.workflows.base import Workflow

__all__ = [
    "__version__",
    "BaseModule",
    "FluxError",
    "Workflow",
]

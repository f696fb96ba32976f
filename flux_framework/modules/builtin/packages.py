"""Package-manager steps shared by the built-in modules."""

from __future__ import annotations

from flux_framework.modules.command import RunStep
from flux_framework.system import detect_package_manager


def install_step(packages: list[str]) -> RunStep:
    """Return the step that installs *packages* with the host package manager."""
    pm = detect_package_manager()
    if pm is None:
        raise RuntimeError("No supported package manager found (apt-get, dnf, yum)")
    return RunStep([pm, "install", "-y", *packages])


def upgrade_steps() -> list[RunStep]:
    pm = detect_package_manager()
    if pm is None:
        raise RuntimeError("No supported package manager found (apt-get, dnf, yum)")
    if pm == "apt-get":
        return [
            RunStep(["apt-get", "update"]),
            RunStep(["apt-get", "-y", "-o", "Dpkg::Options::=--force-confold", "upgrade"]),
        ]
    return [RunStep([pm, "-y", "upgrade"])]

"""Update module — refresh package indexes, upgrade, install the base set."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.builtin.packages import install_step, upgrade_steps
from flux_framework.modules.command import CommandModule, Step
from flux_framework.system import detect_package_manager


class UpdateModule(CommandModule):
    MODULE_ID = "update"
    DESCRIPTION = "System updates and essential packages"
    VERSION = "1.0.0"
    TAGS = ("system", "packages")

    def is_available(self) -> bool:
        return detect_package_manager() is not None and super().is_available()

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("update")
        steps: list[Step] = list(upgrade_steps())
        packages = list(cfg.get("essential_packages", []))
        if cfg.get("include_dev_packages", False):
            packages += cfg.get("development_packages", [])
        if packages:
            steps.append(install_step(packages))
        return steps

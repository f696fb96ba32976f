"""User module — administrative account creation."""

from __future__ import annotations

import pwd

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step


def user_exists(username: str) -> bool:
    try:
        pwd.getpwnam(username)
    except KeyError:
        return False
    return True


class UserModule(CommandModule):
    MODULE_ID = "user"
    DESCRIPTION = "User and group management"
    VERSION = "1.0.0"
    TAGS = ("system", "security")
    REQUIRED_COMMANDS = ("useradd", "usermod")

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("user")
        general = ctx.config.general
        username = cfg.get("admin_username") or general.default_admin_user
        groups = ",".join(cfg.get("admin_groups") or general.default_admin_groups)
        shell = cfg.get("admin_shell", "/bin/bash")

        if user_exists(username):
            return [RunStep(["usermod", "-a", "-G", groups, username])]
        return [RunStep(["useradd", "-m", "-s", shell, "-G", groups, username])]

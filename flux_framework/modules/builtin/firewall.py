"""Firewall module — UFW default policies and service rules."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step


class FirewallModule(CommandModule):
    MODULE_ID = "firewall"
    DESCRIPTION = "UFW firewall configuration"
    VERSION = "1.0.0"
    TAGS = ("security", "network")
    REQUIRED_COMMANDS = ("ufw",)
    SUPPORTED_DISTROS = frozenset({"debian"})

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("firewall")
        ssh_port = cfg.get("ssh_port", ctx.config.general.default_ssh_port)

        steps: list[Step] = [
            RunStep(["ufw", "default", cfg.get("default_input_policy", "deny"), "incoming"]),
            RunStep(["ufw", "default", cfg.get("default_output_policy", "allow"), "outgoing"]),
        ]
        if cfg.get("allow_ssh", True):
            verb = "limit" if cfg.get("ssh_limit", True) else "allow"
            steps.append(RunStep(["ufw", verb, f"{ssh_port}/tcp"]))
        if cfg.get("allow_http", False):
            steps.append(RunStep(["ufw", "allow", "80/tcp"]))
        if cfg.get("allow_https", False):
            steps.append(RunStep(["ufw", "allow", "443/tcp"]))
        for rule in cfg.get("rules", []):
            steps.append(
                RunStep(
                    [
                        "ufw",
                        rule.get("action", "allow"),
                        f"{rule['port']}/{rule.get('protocol', 'tcp')}",
                    ]
                )
            )
        steps.append(RunStep(["ufw", "--force", "enable"]))
        return steps

"""Network module — static addressing through netplan, or a read-only report."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step, WriteStep

NETPLAN_FILE = Path("/etc/netplan/99-flux.yaml")


def render_netplan(cfg: dict[str, Any], default_dns: list[str]) -> str:
    """Render a netplan document for one statically addressed interface."""
    interface = cfg["interface"]
    prefix = cfg.get("prefix", 24)
    ethernet: dict[str, Any] = {
        "dhcp4": False,
        "addresses": [f"{cfg['ip_address']}/{prefix}"],
        "nameservers": {"addresses": list(cfg.get("dns_servers") or default_dns)},
    }
    if cfg.get("gateway"):
        ethernet["routes"] = [{"to": "default", "via": cfg["gateway"]}]
    if cfg.get("mtu"):
        ethernet["mtu"] = cfg["mtu"]
    document = {"network": {"version": 2, "ethernets": {interface: ethernet}}}
    return yaml.safe_dump(document, sort_keys=False)


class NetworkModule(CommandModule):
    MODULE_ID = "network"
    DESCRIPTION = "Network interface configuration"
    VERSION = "1.0.0"
    TAGS = ("network",)
    REQUIRED_COMMANDS = ("ip",)

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("network")
        if not cfg.get("configure_static", False):
            return [RunStep(["ip", "-brief", "address"])]

        missing = [k for k in ("interface", "ip_address") if not cfg.get(k)]
        if missing:
            raise ValueError(f"Static network configuration needs: {', '.join(missing)}")
        return [
            WriteStep(NETPLAN_FILE, render_netplan(cfg, ctx.config.general.default_dns), 0o600),
            RunStep(["netplan", "generate"]),
            RunStep(["netplan", "apply"]),
        ]

"""Certificates module — CA bundle refresh and optional Let's Encrypt issuance."""

from __future__ import annotations

from flux_framework.modules.base import ModuleContext
from flux_framework.modules.command import CommandModule, RunStep, Step


class CertsModule(CommandModule):
    MODULE_ID = "certs"
    DESCRIPTION = "SSL/TLS certificate management"
    VERSION = "1.0.0"
    TAGS = ("security", "tls")
    REQUIRED_COMMANDS = ("update-ca-certificates",)
    SUPPORTED_DISTROS = frozenset({"debian"})

    def plan(self, ctx: ModuleContext) -> list[Step]:
        cfg = ctx.config.module_config("certs")
        steps: list[Step] = [RunStep(["update-ca-certificates"])]

        domains = cfg.get("domains", [])
        if cfg.get("enable_letsencrypt", False) and domains:
            email = cfg.get("email")
            if not email:
                raise ValueError("Let's Encrypt needs modules.certs.email")
            command = ["certbot", "certonly", "--non-interactive", "--agree-tos", "-m", email]
            if cfg.get("webroot") and cfg.get("webserver") != "standalone":
                command += ["--webroot", "-w", cfg["webroot"]]
            else:
                command.append("--standalone")
            for domain in domains:
                command += ["-d", domain]
            steps.append(RunStep(command))
        return steps

"""Built-in modules, in registration order."""

from __future__ import annotations

from flux_framework.modules.base import BaseModule
from flux_framework.modules.builtin.certs import CertsModule
from flux_framework.modules.builtin.firewall import FirewallModule
from flux_framework.modules.builtin.hostname import HostnameModule
from flux_framework.modules.builtin.motd import MotdModule
from flux_framework.modules.builtin.netdata import NetdataModule
from flux_framework.modules.builtin.network import NetworkModule
from flux_framework.modules.builtin.ssh import SshModule
from flux_framework.modules.builtin.sysctl import SysctlModule
from flux_framework.modules.builtin.timezone import TimezoneModule
from flux_framework.modules.builtin.update import UpdateModule
from flux_framework.modules.builtin.user import UserModule
from flux_framework.modules.builtin.zsh import ZshModule

BUILTIN_MODULES: tuple[type[BaseModule], ...] = (
    UpdateModule,
    NetworkModule,
    HostnameModule,
    TimezoneModule,
    UserModule,
    SshModule,
    FirewallModule,
    CertsModule,
    SysctlModule,
    ZshModule,
    MotdModule,
    NetdataModule,
)

__all__ = [
    "BUILTIN_MODULES",
    "CertsModule",
    "FirewallModule",
    "HostnameModule",
    "MotdModule",
    "NetdataModule",
    "NetworkModule",
    "SshModule",
    "SysctlModule",
    "TimezoneModule",
    "UpdateModule",
    "UserModule",
    "ZshModule",
]

"""Module layer — Distribution detection and compatibility guard.

This module provides:

1. **DistroInfo** — Reads ``/etc/os-release`` once per process and exposes
   the distro id, the families it belongs to, and its version.

2. **DistroGuard** — Compares a module's advisory ``SUPPORTED_DISTROS``
   against the detected distro.  Entries may be ``"all"``, a distro id
   (``"ubuntu"``) or a family (``"debian"``, ``"rhel"``).

Usage::

    guard = DistroGuard()                 # auto-detects
    guard = DistroGuard(DistroInfo(...))  # inject for testing
    if guard.is_supported(module):
        ...

Detection never fails: a host without ``/etc/os-release`` is reported as
distro ``"unknown"`` and only supports modules that declare ``"all"``.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from flux_framework.modules.base import BaseModule

OS_RELEASE_PATH = Path("/etc/os-release")

# Maps ID_LIKE tokens onto the family names modules declare.
_FAMILY_ALIASES = {
    "debian": "debian",
    "ubuntu": "debian",
    "rhel": "rhel",
    "fedora": "rhel",
    "centos": "rhel",
}


@dataclass(frozen=True)
class DistroInfo:
    """Immutable snapshot of the current distribution.

    Use :meth:`detect` to create an instance from the host.
    """

    id: str
    name: str
    version: str
    families: frozenset[str] = frozenset()
    kernel: str = ""
    architecture: str = ""
    extra: dict[str, str] = field(default_factory=dict)

    _cache: ClassVar["DistroInfo | None"] = None

    @classmethod
    def detect(cls, os_release: Path | None = None) -> "DistroInfo":
        """Read the host distro.  Only the default os-release path is cached."""
        use_cache = os_release is None
        if use_cache and cls._cache is not None:
            return cls._cache

        fields = parse_os_release(os_release or OS_RELEASE_PATH)
        distro_id = fields.get("ID", "unknown").lower()
        like = fields.get("ID_LIKE", "").lower().split()
        families = {
            _FAMILY_ALIASES[token]
            for token in [distro_id, *like]
            if token in _FAMILY_ALIASES
        }

        info = cls(
            id=distro_id,
            name=fields.get("PRETTY_NAME", fields.get("NAME", distro_id)),
            version=fields.get("VERSION_ID", ""),
            families=frozenset(families),
            kernel=platform.release(),
            architecture=platform.machine(),
        )
        if use_cache:
            cls._cache = info
        return info

    @classmethod
    def reset_cache(cls) -> None:
        """Clear the cached distro info.  Useful in tests."""
        cls._cache = None

    def is_debian_based(self) -> bool:
        return "debian" in self.families

    def is_rhel_based(self) -> bool:
        return "rhel" in self.families

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "families": ",".join(sorted(self.families)),
            "kernel": self.kernel,
            "architecture": self.architecture,
        }


def parse_os_release(path: Path) -> dict[str, str]:
    """Parse an os-release file into a dict.  Missing file → empty dict."""
    try:
        content = path.read_text(errors="replace")
    except OSError:
        return {}

    fields: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


class DistroGuard:
    """Checks a module's advisory distro list against the current host.

    Args:
        distro: Optional pre-detected :class:`DistroInfo`.  If not provided,
            :meth:`DistroInfo.detect` is called automatically.
    """

    def __init__(self, distro: DistroInfo | None = None) -> None:
        self._distro = distro or DistroInfo.detect()

    @property
    def distro(self) -> DistroInfo:
        return self._distro

    def is_supported(self, module: type[BaseModule] | BaseModule) -> bool:
        supported = {d.lower() for d in module.SUPPORTED_DISTROS}
        if "all" in supported:
            return True
        if self._distro.id in supported:
            return True
        return bool(supported & self._distro.families)

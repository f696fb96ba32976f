"""Module layer — Discovery descriptor.

A ModuleDescriptor is the snapshot ``ModuleRegistry.discover()`` returns for
each registered module.  It is what ``flux list`` renders; availability is
evaluated at snapshot time and not refreshed afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ModuleDescriptor:
    name: str
    description: str
    version: str
    available: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "available": self.available,
        }

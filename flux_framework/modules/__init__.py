"""Module layer — BaseModule interface, registry, and discovery."""

from flux_framework.modules.base import BaseModule, ModuleContext, ModuleInfo
from flux_framework.modules.descriptor import ModuleDescriptor
from flux_framework.modules.registry import ModuleRegistry

__all__ = [
    "BaseModule",
    "ModuleContext",
    "ModuleInfo",
    "ModuleDescriptor",
    "ModuleRegistry",
]

"""Module layer — Module registry.

The registry is the single point of truth for all known modules.
It handles:
  - Registration by name (last registration wins)
  - Discovery snapshots sorted by name
  - Lookup
  - The invoke gate every module call goes through:
        lookup -> availability -> help shortcut -> execute

The registry is built once at startup and only read afterwards.  It knows
nothing about what a module does; it only talks to the ``BaseModule``
interface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from flux_framework.exceptions import (
    FluxError,
    ModuleExecutionError,
    ModuleNotFoundError,
    ModuleUnavailableError,
)
from flux_framework.logging import get_logger
from flux_framework.modules.base import HELP_FLAGS
from flux_framework.modules.descriptor import ModuleDescriptor

if TYPE_CHECKING:
    from flux_framework.config import Settings
    from flux_framework.modules.base import BaseModule

log = get_logger(__name__)


class ModuleRegistry:
    """Runtime registry for Flux modules.

    Usage::

        registry = ModuleRegistry()
        registry.register(SshModule())
        await registry.invoke("ssh", ["--dry-run"], settings)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._modules: dict[str, "BaseModule"] = {}
        self._console = console or Console()

    def register(self, module: "BaseModule") -> None:
        """Register a module instance under ``module.name()``.

        A second registration under the same name replaces the first.
        """
        name = module.name()
        if not name:
            raise ValueError(f"Module {type(module).__name__} has no MODULE_ID.")

        if name in self._modules:
            log.warning("module_already_registered", module=name)

        self._modules[name] = module
        log.debug("module_registered", module=name, version=module.version())

    def resolve(self, name: str) -> "BaseModule":
        """Return the module registered as *name*.

        Raises:
            ModuleNotFoundError: No module with this name is registered.
        """
        try:
            return self._modules[name]
        except KeyError:
            raise ModuleNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def names(self) -> list[str]:
        return sorted(self._modules)

    def discover(self) -> list[ModuleDescriptor]:
        """Snapshot every module with its current availability, sorted by name."""
        descriptors = [
            ModuleDescriptor(
                name=name,
                description=module.description(),
                version=module.version(),
                available=module.is_available(),
            )
            for name, module in self._modules.items()
        ]
        return sorted(descriptors, key=lambda d: d.name)

    async def invoke(self, name: str, args: list[str], config: "Settings") -> None:
        """Run module *name* through the invoke gate.

        Raises:
            ModuleNotFoundError:    *name* is not registered.
            ModuleUnavailableError: The module reports itself unavailable;
                                    ``execute`` is not called.
            ModuleExecutionError:   ``execute`` raised a non-Flux exception.
            FluxError:              ``execute`` raised a Flux error (passed on as is).
        """
        module = self.resolve(name)

        if not module.is_available():
            raise ModuleUnavailableError(name)

        if any(arg in HELP_FLAGS for arg in args):
            self._console.print(module.help(), markup=False, highlight=False)
            return

        log.info("module_started", module=name, args=args)
        try:
            await module.execute(list(args), config.model_copy(deep=True))
        except FluxError:
            raise
        except Exception as exc:
            raise ModuleExecutionError(name, exc) from exc
        log.info("module_finished", module=name)

    def status_report(self) -> dict[str, list[str]]:
        """Return registered module names split by current availability."""
        available: list[str] = []
        unavailable: list[str] = []
        for descriptor in self.discover():
            (available if descriptor.available else unavailable).append(descriptor.name)
        return {"available": available, "unavailable": unavailable}

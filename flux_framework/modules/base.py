"""Module layer — BaseModule interface.

Every module must subclass ``BaseModule``, fill in its identity class
attributes and implement ``execute()``.

Design principles:
  - Modules are stateless; everything they need arrives through ``execute``.
  - ``is_available()`` only inspects the host (binaries on PATH, distro) and
    never changes it.
  - A module signals failure by raising.  The registry and the workflow
    executor decide what a failure means for the caller.
  - ``REQUIRES_ROOT`` and ``SUPPORTED_DISTROS`` are advisory metadata read by
    the CLI privilege check and the distro guard.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from flux_framework.config import Settings

HELP_FLAGS = ("--help", "-h")


@dataclass(frozen=True)
class ModuleInfo:
    """Identity and metadata of a module.  Display-only except ``name``."""

    name: str
    description: str
    version: str
    author: str = ""
    tags: tuple[str, ...] = ()
    requires_root: bool = True
    supported_distros: frozenset[str] = frozenset({"all"})


@dataclass
class ModuleContext:
    """Per-call execution options parsed from a module's argument list."""

    config: "Settings"
    args: list[str] = field(default_factory=list)
    dry_run: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args: list[str], config: "Settings") -> "ModuleContext":
        return cls(
            config=config,
            args=list(args),
            dry_run="--dry-run" in args or config.dry_run,
            verbose="--verbose" in args or "-v" in args,
        )


class BaseModule(ABC):
    """Abstract base class for all Flux modules.

    Subclasses must:
      1. Set ``MODULE_ID`` (lowercase, e.g. ``"ssh"``)
      2. Set ``DESCRIPTION`` and ``VERSION``
      3. Implement :meth:`execute`
      4. Optionally override :meth:`is_available` and :meth:`help`
    """

    MODULE_ID: ClassVar[str] = ""
    DESCRIPTION: ClassVar[str] = ""
    VERSION: ClassVar[str] = "0.0.0"
    AUTHOR: ClassVar[str] = "Flux Contributors"
    TAGS: ClassVar[tuple[str, ...]] = ()
    REQUIRES_ROOT: ClassVar[bool] = True
    SUPPORTED_DISTROS: ClassVar[frozenset[str]] = frozenset({"all"})

    def name(self) -> str:
        return self.MODULE_ID

    def description(self) -> str:
        return self.DESCRIPTION

    def version(self) -> str:
        return self.VERSION

    def info(self) -> ModuleInfo:
        return ModuleInfo(
            name=self.MODULE_ID,
            description=self.DESCRIPTION,
            version=self.VERSION,
            author=self.AUTHOR,
            tags=tuple(self.TAGS),
            requires_root=self.REQUIRES_ROOT,
            supported_distros=frozenset(self.SUPPORTED_DISTROS),
        )

    def is_available(self) -> bool:
        """Return True if the module can run on this host.  Default: always."""
        return True

    def help(self) -> str:
        return (
            f"{self.name()} v{self.version()} - {self.description()}\n\n"
            "Options:\n"
            "  --dry-run      Show what would change without changing it\n"
            "  -v, --verbose  Log every step\n"
            "  -h, --help     Show this help"
        )

    @abstractmethod
    async def execute(self, args: list[str], config: "Settings") -> None:
        """Run the module.

        Args:
            args:   Module arguments (empty when run from a workflow).
            config: A private copy of the settings; changes are not seen by
                    the caller.

        Raises:
            Any exception to report failure.
        """
        ...

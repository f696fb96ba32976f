"""Flux — Exception hierarchy.

All exceptions raised by the framework inherit from FluxError so that the CLI
can catch the full family with a single except clause.

Hierarchy:
    FluxError
    ├── ConfigError
    ├── PromptError
    ├── PrivilegeError
    ├── CommandFailedError
    ├── ModuleError
    │   ├── ModuleNotFoundError
    │   ├── ModuleUnavailableError
    │   └── ModuleExecutionError
    └── WorkflowError
        └── WorkflowNotFoundError
"""

from __future__ import annotations

from typing import Any


class FluxError(Exception):
    """Base exception for all Flux errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context})"


class ConfigError(FluxError):
    """The configuration file could not be read, parsed, or updated."""


class PromptError(FluxError):
    """The interactive confirmation provider could not obtain an answer."""


class PrivilegeError(FluxError):
    """The command needs root privileges and the process does not have them."""


class CommandFailedError(FluxError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        super().__init__(
            f"Command '{' '.join(command)}' failed with exit code {returncode}"
            + (f": {stderr.strip()}" if stderr.strip() else ""),
            context={"command": command, "returncode": returncode, "stderr": stderr},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


# ---------------------------------------------------------------------------
# Module layer
# ---------------------------------------------------------------------------


class ModuleError(FluxError):
    """Base for all module errors."""


class ModuleNotFoundError(ModuleError):
    """No module with the given name is registered."""

    def __init__(self, module_name: str) -> None:
        super().__init__(
            f"Module '{module_name}' not found",
            context={"module": module_name},
        )
        self.module_name = module_name


class ModuleUnavailableError(ModuleError):
    """The module is registered but reports itself unavailable on this host."""

    def __init__(self, module_name: str) -> None:
        super().__init__(
            f"Module '{module_name}' is not available on this system",
            context={"module": module_name},
        )
        self.module_name = module_name


class ModuleExecutionError(ModuleError):
    """A module raised an unexpected error while executing."""

    def __init__(self, module_name: str, cause: Exception) -> None:
        super().__init__(
            f"Module '{module_name}' failed: {cause}",
            context={"module": module_name, "cause": str(cause)},
        )
        self.module_name = module_name
        self.cause = cause


# ---------------------------------------------------------------------------
# Workflow layer
# ---------------------------------------------------------------------------


class WorkflowError(FluxError):
    """Base for all workflow errors."""


class WorkflowNotFoundError(WorkflowError):
    """No workflow with the given name is registered."""

    def __init__(self, workflow_name: str) -> None:
        super().__init__(
            f"Workflow '{workflow_name}' not found",
            context={"workflow": workflow_name},
        )
        self.workflow_name = workflow_name

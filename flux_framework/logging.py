"""Flux — Structured logging configuration.

Uses structlog for structured, levelled logging with consistent key names
across the framework.  All log entries include:
    - timestamp (ISO-8601)
    - level
    - logger (Python logger name)
    - workflow / module (bound via context variables during a run)
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

_ctx_workflow: ContextVar[str | None] = ContextVar("workflow", default=None)
_ctx_module: ContextVar[str | None] = ContextVar("module", default=None)


def bind_run_context(workflow: str | None = None, module: str | None = None) -> None:
    """Bind the workflow / module being run to the current task."""
    if workflow is not None:
        _ctx_workflow.set(workflow)
    if module is not None:
        _ctx_module.set(module)


def clear_run_context() -> None:
    _ctx_workflow.set(None)
    _ctx_module.set(None)


def clear_module_context() -> None:
    """Drop the module binding, keeping the workflow."""
    _ctx_module.set(None)


def _inject_context_vars(
    _logger: WrappedLogger, _method: str, event_dict: EventDict
) -> EventDict:
    """Add ContextVar values to every log record."""
    if (workflow := _ctx_workflow.get()) is not None:
        event_dict.setdefault("workflow", workflow)
    if (module := _ctx_module.get()) is not None:
        event_dict.setdefault("module", module)
    return event_dict


def configure_logging(
    level: str = "info",
    format: str = "console",
    log_file: str | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Call once at CLI startup, before any log statements.

    Args:
        level:    One of debug, info, warning, error, critical.
        format:   ``"console"`` for human-readable output, ``"json"`` for
                  machine-readable structured logs.
        log_file: Optional path to write logs to in addition to stderr.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _inject_context_vars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Logs go to stderr so they never interleave with tables printed on stdout.
    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(level.upper())

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger for *name*.

    Usage::

        log = get_logger(__name__)
        log.info("module_completed", module="ssh")
    """
    return structlog.get_logger(name)

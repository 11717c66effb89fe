"""Structured logging for memory-ai-orchestrator.

JSON log lines via structlog. configure_logging() runs once per process;
get_logger() auto-configures with defaults so library callers that never
configure logging still get usable output.

Every line carries the correlation id of the orchestrator call that
produced it, so the two concurrent provider calls of an ensemble
extraction can be tied back to one request.
"""

import contextlib
import contextvars
import sys
import uuid
from collections.abc import Iterator
from typing import Any, TextIO

import structlog
from structlog.types import EventDict


_configured: bool = False

_correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


# =============================================================================
# Correlation ID Context
# =============================================================================


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID for the current async context."""
    _correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    """Get the current correlation ID, if one is set."""
    return _correlation_id_var.get()


@contextlib.contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run a block under a correlation ID.

    Reuses the ID already set by the caller; otherwise a fresh one is
    generated for the duration of the block.

    Yields:
        The correlation ID in effect inside the block.
    """
    existing = get_correlation_id()
    if existing is not None and correlation_id is None:
        yield existing
        return

    token = _correlation_id_var.set(correlation_id or uuid.uuid4().hex[:16])
    try:
        yield _correlation_id_var.get() or ""
    finally:
        _correlation_id_var.reset(token)


def add_correlation_id(
    _logger: object, _method_name: str, event_dict: EventDict
) -> EventDict:
    """structlog processor adding correlation_id when one is set."""
    correlation_id = get_correlation_id()
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def _level_to_int(level: str) -> int:
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    force: bool = False,
) -> None:
    """Configure structlog once at application startup.

    Subsequent calls are no-ops unless force=True (for testing).

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Output stream. Defaults to sys.stdout.
        force: Force reconfiguration.
    """
    global _configured

    if _configured and not force:
        return

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """Reset configuration state so tests can reconfigure."""
    global _configured
    _configured = False


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to ``name``.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured structlog BoundLogger instance.
    """
    configure_logging()
    return structlog.get_logger().bind(logger=name)

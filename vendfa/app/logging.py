"""Structured JSON logging for VendFA."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

import structlog

# Context variable for the interactive session
_session_id: ContextVar[str | None] = ContextVar("session_id", default=None)


def set_session_id(session_id: str) -> None:
    """Set the session ID for all subsequent log messages."""
    _session_id.set(session_id)


def clear_context() -> None:
    """Clear all context variables."""
    _session_id.set(None)


def add_context_ids(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add context IDs to log events."""
    session_id = _session_id.get()
    if session_id:
        event_dict["session_id"] = session_id
    return event_dict


def add_timestamp(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to add ISO8601 timestamp."""
    event_dict["ts"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_event_key(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename 'event' to 'message' for consistency."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Logs go to stderr so they never interleave with the console screen
    written to stdout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON; if False, output human-readable
        log_file: Optional file path to write logs to
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        add_context_ids,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            rename_event_key,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)


def get_component_logger(component: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger bound to a specific component.

    Args:
        component: Component name (e.g., "vending_engine", "console")

    Returns:
        Logger with component field pre-bound; stays lazy so loggers
        created at import time pick up setup_logging() configuration
    """
    return structlog.get_logger(component=component)


class Loggers:
    """Pre-configured loggers for main components."""

    @staticmethod
    def console() -> structlog.stdlib.BoundLogger:
        return get_component_logger("console")

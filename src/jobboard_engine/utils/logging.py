"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Dict, Optional, TextIO

import structlog
from rich.logging import RichHandler

from jobboard_engine.config import settings


def resolve_level(name: str) -> int:
    """Translate a level name such as ``"info"`` into its logging constant."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def configure_logging(
    log_level: Optional[str] = None,
    debug: Optional[bool] = None,
    stream: Optional[TextIO] = None,
    cache_loggers: bool = True,
) -> None:
    """
    Configure structured logging for engine decisions.

    Args:
        log_level: Level name; defaults to ``settings.log_level``
        debug: Render human-readable console lines instead of JSON; defaults
            to ``settings.debug``
        stream: Where structlog writes; defaults to stdout
        cache_loggers: Freeze each logger's configuration on first use
    """
    level = resolve_level(log_level or settings.log_level)
    debug = settings.debug if debug is None else debug
    stream = stream or sys.stdout

    # Standard library records (third-party libraries) go through rich
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )

    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(sort_keys=True)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger named after its module."""
    return structlog.get_logger(name)


def log_decision(operation: str, allowed: bool, **kwargs: Any) -> Dict[str, Any]:
    """Create a log context for an engine decision."""
    return {
        "operation": operation,
        "allowed": allowed,
        "parameters": {k: v for k, v in kwargs.items() if not k.startswith("_")},
    }

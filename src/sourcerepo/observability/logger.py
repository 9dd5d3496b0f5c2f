"""
Structured Logging Configuration
Centralized structlog setup with contextvars-bound context
"""
from __future__ import annotations

import contextlib
import logging
import sys
import time
from typing import Any, Dict, Iterator, Optional

import structlog

from sourcerepo.config import get_settings


def configure_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configure structured logging for the process.

    Sets up structlog with processors for:
    - Merging contextvars-bound context (see bind_context)
    - Adding logger name, log level and an ISO timestamp
    - JSON formatting (staging/prod) or console (local/dev)

    Args:
        log_level: Logging level name; defaults to Settings.log_level
        json_logs: Whether to output JSON; defaults to Settings.log_format == "json"
    """
    settings = get_settings()
    level = (log_level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.json_logs

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level))

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("Sourced provider", entity="User", operations=["get"])
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables to all subsequent log entries."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


class Timer:
    """Elapsed wall time of a time_block, readable after the block exits."""

    def __init__(self) -> None:
        self.started = time.perf_counter()
        self.elapsed_ms = 0.0

    def stop(self) -> float:
        self.elapsed_ms = (time.perf_counter() - self.started) * 1000.0
        return self.elapsed_ms


@contextlib.contextmanager
def time_block(
    name: str,
    *,
    logger: Optional[structlog.stdlib.BoundLogger] = None,
    labels: Optional[Dict[str, Any]] = None,
) -> Iterator[Timer]:
    """
    Time a block and log it at debug level as a performance metric.
    Usage:
        with time_block("repository.get", logger=log, labels={"entity": "User"}) as t:
            result = await provider.get(id)
        t.elapsed_ms
    """
    _log = logger or structlog.get_logger("performance")
    timer = Timer()
    try:
        yield timer
    finally:
        ms = timer.stop()
        _log.debug("Performance metric", metric_name=name, value=round(ms, 3), unit="ms", labels=labels or {})

"""Observability: structured logging and timing helpers."""
from sourcerepo.observability.logger import (
    Timer,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    time_block,
)

__all__ = [
    "Timer",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "time_block",
]

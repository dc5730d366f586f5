from __future__ import annotations

from .config import LOG_LEVELS, LoggingConfig, get_default_log_path, parse_level
from .core import (
    active_sinks,
    configure_logging,
    is_logging_configured,
    root_queue_handler,
    shutdown_logging,
)

__all__ = [
    "LOG_LEVELS",
    "LoggingConfig",
    "active_sinks",
    "configure_logging",
    "get_default_log_path",
    "is_logging_configured",
    "parse_level",
    "root_queue_handler",
    "shutdown_logging",
]

from __future__ import annotations

"""
Logging Configuration Models.

Level names accepted by the shell settings, the default log location and the
immutable settings object consumed by configure_logging().
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from treefs.infra.fs import get_user_data_dir

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_LOG_NAME = "treefs.log"


def parse_level(name: Optional[str], default: int = logging.WARNING) -> int:
    """Map a level name (any case) to its numeric value, or ``default``."""
    if not name:
        return default
    return LOG_LEVELS.get(str(name).strip().upper(), default)


def get_default_log_path() -> str:
    """Rotating log file kept next to the snapshot in the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", DEFAULT_LOG_NAME)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for one logging session.

    Attributes:
        level: Minimum severity name.
        console: Echo records to stderr. Shell output itself goes to stdout,
            so diagnostics never interleave with command results on a pipe.
        log_file: Optional path of the rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files to keep.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], log_file: Optional[str] = None) -> LoggingConfig:
        """
        Build the logging settings from a validated treefs configuration.

        An explicit ``log_file`` wins; otherwise ``log_to_file`` selects the
        default location.
        """
        if not log_file and settings.get("log_to_file"):
            log_file = get_default_log_path()
        return cls(level=settings.get("log_level", "WARNING"), console=True, log_file=log_file)

from __future__ import annotations

"""
Logging Sinks.

Factories for the handlers that sit behind the queue listener: a stderr
console sink and an optional rotating file sink.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from treefs.infra.fs import safe_mkdir
from treefs.infra.logging.config import LoggingConfig


def build_console_sink(cfg: LoggingConfig, level: int) -> logging.Handler:
    sink = logging.StreamHandler(sys.stderr)
    sink.setLevel(level)
    sink.setFormatter(logging.Formatter(cfg.console_fmt))
    return sink


def build_file_sink(cfg: LoggingConfig, level: int) -> Optional[logging.Handler]:
    """
    Open the rotating log file named by ``cfg.log_file``.

    A log file that cannot be created is reported on stderr and skipped; the
    shell keeps running with console logging only.

    Returns:
        Optional[logging.Handler]: The file sink, or None on I/O failure.
    """
    if not cfg.log_file:
        return None

    ok, error = safe_mkdir(os.path.dirname(os.path.abspath(cfg.log_file)))
    if not ok:
        sys.stderr.write(f"treefs: log directory unavailable for '{cfg.log_file}': {error}\n")
        return None

    try:
        sink = RotatingFileHandler(
            cfg.log_file,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"treefs: cannot open log file '{cfg.log_file}': {e}\n")
        return None

    sink.setLevel(level)
    sink.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return sink

from __future__ import annotations

"""
Logging Session Lifecycle.

The root logger gets a single QueueHandler; a QueueListener thread forwards
records to the console and file sinks so a slow disk never stalls the shell
prompt. One session is active at a time: configure_logging() is idempotent
unless forced, and shutdown_logging() drains the queue and closes every sink.
"""

import atexit
import logging
import queue
from dataclasses import dataclass, field
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from treefs.infra.logging.config import LoggingConfig, parse_level
from treefs.infra.logging.handlers import build_console_sink, build_file_sink


@dataclass
class _LoggingSession:
    queue_handler: Optional[QueueHandler] = None
    listener: Optional[QueueListener] = None
    sinks: List[logging.Handler] = field(default_factory=list)


_session: Optional[_LoggingSession] = None
_atexit_hooked = False

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Start a logging session on the root logger.

    Args:
        cfg: Session settings.
        force: Replace an already running session instead of keeping it.

    Returns:
        logging.Logger: The root logger.
    """
    global _session, _atexit_hooked

    root = logging.getLogger()
    if _session is not None:
        if not force:
            return root
        shutdown_logging()

    level = parse_level(cfg.level)
    root.setLevel(level)

    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(build_console_sink(cfg, level))
    file_sink = build_file_sink(cfg, level)
    if file_sink is not None:
        sinks.append(file_sink)

    session = _LoggingSession(sinks=sinks)
    if sinks:
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        session.queue_handler = QueueHandler(log_queue)
        session.listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        session.listener.start()
        root.addHandler(session.queue_handler)

    _session = session
    if not _atexit_hooked:
        atexit.register(shutdown_logging)
        _atexit_hooked = True

    root.debug(f"Logging started at {logging.getLevelName(level)} with {len(sinks)} sink(s).")
    return root


def shutdown_logging() -> None:
    """Drain pending records, detach the queue handler and close all sinks."""
    global _session

    session, _session = _session, None
    if session is None:
        return

    if session.listener is not None:
        session.listener.stop()
    if session.queue_handler is not None:
        logging.getLogger().removeHandler(session.queue_handler)
        session.queue_handler.close()
    for sink in session.sinks:
        sink.close()


def is_logging_configured() -> bool:
    return _session is not None


def active_sinks() -> List[logging.Handler]:
    """Handlers currently fed by the queue listener."""
    return list(_session.sinks) if _session is not None else []


def root_queue_handler() -> Optional[QueueHandler]:
    return _session.queue_handler if _session is not None else None

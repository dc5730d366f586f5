from __future__ import annotations

"""
treefs Entry Point.

Runs the shell CLI under a crash supervisor: any exception that escapes the
application is written to the log with its traceback and summarized on
stderr, and the process exits with status 1 instead of dumping a bare trace.
"""

import logging
import os
import sys
import traceback
from types import TracebackType
from typing import Optional, Type

# Running this file directly from a checkout: make ``src`` importable
SRC_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

logger = logging.getLogger("treefs.supervisor")


def report_crash(
        exctype: Type[BaseException],
        value: BaseException,
        tb: Optional[TracebackType],
) -> None:
    """
    ``sys.excepthook`` replacement for unexpected failures.

    Ctrl+C is passed to the interpreter's default hook untouched.
    """
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, tb)
        return

    trace = "".join(traceback.format_exception(exctype, value, tb))
    logger.critical(f"Unhandled {exctype.__name__}: {value}\n{trace}")

    banner = "=" * 72
    sys.stderr.write(f"\n{banner}\ntreefs crashed: {exctype.__name__}: {value}\n{banner}\n{trace}")


sys.excepthook = report_crash


def main() -> int:
    """
    Console script target.

    Returns:
        int: Exit status of the CLI, or 1 after an unexpected exception.
    """
    from treefs.interface.cli.app import main as cli_main

    try:
        return cli_main()
    except Exception as e:
        report_crash(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())

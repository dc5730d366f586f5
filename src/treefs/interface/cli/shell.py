from __future__ import annotations

"""
Interactive Shell Loop.

Reads commands line by line, shows the working directory in the prompt and
prints each command's output. The loop ends on ``exit`` or end of input.
"""

import logging
import sys
from typing import Optional, TextIO

from treefs.interface.cli.dispatcher import CommandDispatcher
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_PREFIX = "Current directory: "


def run_shell(
        dispatcher: CommandDispatcher,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        prompt_prefix: str = DEFAULT_PROMPT_PREFIX,
) -> int:
    """
    Drive the read-eval-print loop until the user leaves.

    Args:
        dispatcher: Command executor bound to a tree.
        stdin: Input stream (defaults to sys.stdin).
        stdout: Output stream (defaults to sys.stdout).
        prompt_prefix: Text shown before the rendered working directory.

    Returns:
        int: Number of commands executed.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    executed = 0

    logger.debug("Interactive session started.")
    while True:
        path = dispatcher.tree.render_path()
        stdout.write(i18n.t("shell.prompt", prefix=prompt_prefix, path=path))
        stdout.flush()

        line = stdin.readline()
        if not line:
            # End of input behaves like exit
            stdout.write("\n")
            break

        result = dispatcher.execute(line)
        if line.strip():
            executed += 1
        for out in result.output:
            stdout.write(out + "\n")
        if result.exit_requested:
            break

    logger.debug(f"Interactive session ended after {executed} commands.")
    return executed

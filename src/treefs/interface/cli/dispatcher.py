from __future__ import annotations

"""
Shell Command Dispatcher.

Parses line-oriented commands and maps each verb onto a tree engine
operation. Recoverable filesystem errors are reported in the result and the
session continues; only ``exit`` asks the caller to stop.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from treefs.core.analysis.tree_renderer import render_tree
from treefs.core.services.tree_engine import FileSystemTree
from treefs.domain.errors import FileSystemError
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass
class CommandResult:
    """
    Outcome of a single command line.

    Attributes:
        output: Lines to show the user.
        ok: False when the command was rejected or failed.
        exit_requested: True when the session should end.
    """
    output: List[str] = field(default_factory=list)
    ok: bool = True
    exit_requested: bool = False


Handler = Callable[[str], CommandResult]


def parse_command(line: str) -> Tuple[str, str]:
    """
    Split a raw line into its verb and the remainder.

    The remainder keeps inner whitespace; only the separator run after the
    verb and the trailing line break are dropped.
    """
    stripped = line.strip()
    if not stripped:
        return "", ""
    parts = stripped.split(None, 1)
    verb = parts[0]
    rest = parts[1] if len(parts) > 1 else ""
    return verb, rest


def _split_name(rest: str) -> Tuple[str, str]:
    parts = rest.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], (parts[1] if len(parts) > 1 else "")

# -----------------------------------------------------------------------------
# DISPATCHER
# -----------------------------------------------------------------------------

class CommandDispatcher:
    """Executes shell commands against a FileSystemTree."""

    def __init__(self, tree: FileSystemTree, snapshot_path: Optional[str] = None):
        self.tree = tree
        self.snapshot_path = snapshot_path
        self._handlers: Dict[str, Tuple[Handler, str]] = {
            "mkdir": (self._mkdir, "mkdir <name>"),
            "touch": (self._touch, "touch <name> [content]"),
            "cd": (self._cd, "cd <name>|.."),
            "pwd": (self._pwd, "pwd"),
            "ls": (self._ls, "ls"),
            "cat": (self._cat, "cat <name>"),
            "tree": (self._tree, "tree"),
            "save": (self._save, "save [path]"),
            "load": (self._load, "load [path]"),
            "help": (self._help, "help"),
            "exit": (self._exit, "exit"),
        }

    @property
    def verbs(self) -> List[str]:
        return list(self._handlers)

    def execute(self, line: str) -> CommandResult:
        """
        Run one command line.

        Args:
            line: Raw input, with or without its line break.

        Returns:
            CommandResult: Output lines and session control flags.
        """
        verb, rest = parse_command(line)
        if not verb:
            return CommandResult()

        entry = self._handlers.get(verb)
        if entry is None:
            logger.debug(f"Unknown command '{verb}'")
            return CommandResult([i18n.t("shell.unknown", command=verb)], ok=False)

        handler, _ = entry
        try:
            return handler(rest)
        except FileSystemError as e:
            logger.warning(f"{verb}: {e.message}")
            return CommandResult([e.message], ok=False)

    def run_script(self, lines: List[str]) -> Tuple[List[str], bool]:
        """
        Execute several command lines in order.

        Returns:
            Tuple[List[str], bool]: All output lines, and whether every command succeeded.
        """
        output: List[str] = []
        all_ok = True
        for line in lines:
            result = self.execute(line)
            output.extend(result.output)
            all_ok = all_ok and result.ok
            if result.exit_requested:
                break
        return output, all_ok

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _usage(self, verb: str) -> CommandResult:
        return CommandResult([i18n.t("shell.usage", usage=self._handlers[verb][1])], ok=False)

    def _mkdir(self, rest: str) -> CommandResult:
        name, _ = _split_name(rest)
        if not name:
            return self._usage("mkdir")
        self.tree.create_directory(name)
        return CommandResult()

    def _touch(self, rest: str) -> CommandResult:
        name, content = _split_name(rest)
        if not name:
            return self._usage("touch")
        self.tree.create_file(name, content)
        return CommandResult()

    def _cd(self, rest: str) -> CommandResult:
        name, _ = _split_name(rest)
        if not name:
            return self._usage("cd")
        self.tree.change_directory(name)
        return CommandResult()

    def _pwd(self, rest: str) -> CommandResult:
        return CommandResult([self.tree.render_path()])

    def _ls(self, rest: str) -> CommandResult:
        return CommandResult([" ".join(self.tree.list_children())])

    def _cat(self, rest: str) -> CommandResult:
        name, _ = _split_name(rest)
        if not name:
            return self._usage("cat")
        return CommandResult([self.tree.read_file(name)])

    def _tree(self, rest: str) -> CommandResult:
        return CommandResult(render_tree(self.tree.current))

    def _save(self, rest: str) -> CommandResult:
        path = rest.strip() or self.snapshot_path
        if not path:
            return self._usage("save")
        count = self.tree.save(path)
        return CommandResult([i18n.t("shell.saved", count=count, path=path)])

    def _load(self, rest: str) -> CommandResult:
        path = rest.strip() or self.snapshot_path
        if not path:
            return self._usage("load")
        count = self.tree.load(path)
        return CommandResult([i18n.t("shell.loaded", count=count, path=path)])

    def _help(self, rest: str) -> CommandResult:
        lines = [i18n.t("shell.help_header")]
        width = max(len(usage) for _, usage in self._handlers.values())
        for verb, (_, usage) in self._handlers.items():
            lines.append(f"  {usage.ljust(width)}  {i18n.t(f'commands.{verb}')}")
        return CommandResult(lines)

    def _exit(self, rest: str) -> CommandResult:
        return CommandResult(exit_requested=True)

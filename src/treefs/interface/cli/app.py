from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, stored preferences, command-line overrides), optional snapshot
restore, the session itself (interactive shell, one-shot commands or the
demonstration sequence) and the optional snapshot save on exit.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from treefs.core.services.tree_engine import FileSystemTree
from treefs.core.services.validator import validate_config
from treefs.domain.config import get_default_config, load_config, save_config
from treefs.domain.errors import FileSystemError
from treefs.infra.logging import LoggingConfig, configure_logging
from treefs.interface.cli import args as cli_args
from treefs.interface.cli.dispatcher import CommandDispatcher
from treefs.interface.cli.shell import run_shell
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

DEMO_SCRIPT: List[str] = [
    "mkdir home",
    "cd home",
    "mkdir user",
    "cd user",
    "touch notes.txt Hello World!",
    "ls",
    "cat notes.txt",
    "pwd",
]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stdin: Input stream for the interactive shell. Defaults to sys.stdin.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (defaults vs stored preferences, then overrides)
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    config, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap
    configure_logging(LoggingConfig.from_settings(config, log_file=args.log_file))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(config, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        if save_config(config):
            print(i18n.t("cli.status.config_saved"))

    if config["locale"] != i18n.locale:
        i18n.load_locale(config["locale"])

    # 4. Snapshot restore
    tree = FileSystemTree()
    dispatcher = CommandDispatcher(tree, snapshot_path=config["snapshot_path"])

    if config["autoload"]:
        code = _restore_snapshot(tree, config["snapshot_path"], required=bool(args.load_path))
        if code:
            return code

    # 5. Session
    try:
        if args.demo:
            ok = _run_lines(dispatcher, DEMO_SCRIPT)
        elif args.commands:
            ok = _run_lines(dispatcher, args.commands)
        else:
            run_shell(dispatcher, stdin=stdin, prompt_prefix=config["prompt_prefix"])
            ok = True
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130

    # 6. Snapshot save
    save_target = args.save_path or (config["snapshot_path"] if config["autosave"] else None)
    if save_target:
        try:
            tree.save(save_target)
        except FileSystemError as e:
            logger.error(e.message)
            print(f"ERROR: {e.message}", file=sys.stderr)
            return 1

    return 0 if ok else 1

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-None override values into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _restore_snapshot(tree: FileSystemTree, path: str, required: bool) -> int:
    """
    Load the configured snapshot into the tree.

    A missing snapshot is fatal only when it was requested explicitly.

    Returns:
        int: 0 to continue, otherwise the exit code to return.
    """
    if not os.path.exists(path):
        msg = i18n.t("cli.errors.snapshot_missing", path=path)
        if required:
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2
        logger.info(msg)
        return 0

    try:
        tree.load(path)
    except FileSystemError as e:
        logger.error(e.message)
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1
    return 0


def _run_lines(dispatcher: CommandDispatcher, lines: List[str]) -> bool:
    """Execute a fixed command sequence, printing its output."""
    output, ok = dispatcher.run_script(lines)
    for line in output:
        print(line)
    return ok

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

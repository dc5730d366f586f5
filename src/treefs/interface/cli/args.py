from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict

from treefs.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treefs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treefs",
        description=i18n.t("app.description"),
    )

    # --- Snapshot Management ---
    p.add_argument(
        "--load",
        dest="load_path",
        metavar="FILE",
        default=None,
        help=i18n.t("cli.args.load"),
    )
    p.add_argument(
        "--save-on-exit",
        dest="save_path",
        metavar="FILE",
        default=None,
        help=i18n.t("cli.args.save_on_exit"),
    )

    # --- Session Mode ---
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--demo",
        action="store_true",
        help=i18n.t("cli.args.demo"),
    )
    mode.add_argument(
        "-c", "--command",
        dest="commands",
        action="append",
        metavar="CMD",
        default=None,
        help=i18n.t("cli.args.command"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        metavar="FILE",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save_config"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.load_path:
        overrides["snapshot_path"] = args.load_path
        overrides["autoload"] = True
    if args.save_path:
        overrides["autosave"] = True
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["log_to_file"] = True

    return overrides

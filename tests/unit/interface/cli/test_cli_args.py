from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies flag mapping to configuration overrides and mode exclusivity.
"""

import pytest

from treefs.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_no_flags_produce_no_overrides():
    args = parse_args([])

    assert args_to_overrides(args) == {}
    assert args.commands is None
    assert args.demo is False


def test_load_flag_enables_autoload():
    args = parse_args(["--load", "/tmp/fs.dat"])
    overrides = args_to_overrides(args)

    assert overrides["snapshot_path"] == "/tmp/fs.dat"
    assert overrides["autoload"] is True


def test_diagnostic_flags_mapping():
    args = parse_args(["--debug", "--log-file", "/tmp/treefs.log", "--save-on-exit", "out.dat"])
    overrides = args_to_overrides(args)

    assert overrides["log_level"] == "DEBUG"
    assert overrides["log_to_file"] is True
    assert overrides["autosave"] is True
    assert args.save_path == "out.dat"


def test_command_flag_is_repeatable():
    args = parse_args(["-c", "mkdir a", "--command", "ls"])
    assert args.commands == ["mkdir a", "ls"]


def test_demo_and_commands_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["--demo", "-c", "ls"])

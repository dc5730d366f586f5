from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory and the logging subsystem.
3. Shared tree fixtures used across unit tests.
"""

import os
import sys
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treefs.core.services.tree_engine import FileSystemTree  # noqa: E402
from treefs.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_logging(capsys: pytest.CaptureFixture[str]) -> Iterator[None]:
    """
    End the logging session started by a test.

    Requests capsys so the queue is drained while capture is still active.
    """
    yield
    shutdown_logging()


@pytest.fixture
def user_data_dir(tmp_path: Path) -> Iterator[Path]:
    """
    Redirect the application data directory into a temporary folder.

    Prevents tests from reading or writing the real ~/.treefs folder.
    """
    data_dir = tmp_path / "treefs-data"
    data_dir.mkdir()
    config_file = str(data_dir / "config.json")
    with patch("treefs.domain.config.get_user_data_dir", return_value=str(data_dir)), \
            patch("treefs.domain.config.CONFIG_FILE", config_file):
        yield data_dir


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def tree() -> FileSystemTree:
    """An empty filesystem with the cursor at the root."""
    return FileSystemTree()


@pytest.fixture
def populated_tree() -> FileSystemTree:
    """
    A small filesystem, cursor back at the root.

    Structure (chain order, most recent first):
    /
      var/
      home/
        user/
          notes.txt  "Hello World!"
          todo.txt   "buy milk"
          projects/
        guest/
      readme.md  "top level"
    """
    fs = FileSystemTree()
    fs.create_file("readme.md", "top level")
    fs.create_directory("home")
    fs.change_directory("home")
    fs.create_directory("guest")
    fs.create_directory("user")
    fs.change_directory("user")
    fs.create_directory("projects")
    fs.create_file("todo.txt", "buy milk")
    fs.create_file("notes.txt", "Hello World!")
    fs.change_directory("..")
    fs.change_directory("..")
    fs.create_directory("var")
    return fs

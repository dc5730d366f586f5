from __future__ import annotations

"""
Integration tests for the host FileSystem Infrastructure.

Validates path normalization and data directory resolution across
different OS environments.
"""

import os
from pathlib import Path
from unittest.mock import patch

from treefs.infra.fs import (
    get_user_data_dir,
    normalize_path,
    safe_mkdir,
)


def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            os.environ.pop("TREEFS_HOME", None)
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "treefs" in path
                assert path.replace("\\", "/").endswith("AppData/Local/treefs")


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.treefs on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"), patch.dict(os.environ, {}):
        os.environ.pop("TREEFS_HOME", None)
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.treefs")


def test_data_dir_env_override(tmp_path: Path) -> None:
    """TC-01: TREEFS_HOME wins over the platform default and is created."""
    target = tmp_path / "custom-home"
    with patch.dict(os.environ, {"TREEFS_HOME": str(target)}):
        path = get_user_data_dir()

    assert path == str(target)
    assert target.is_dir()


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables."""
    with patch.dict(os.environ, {"TREEFS_TEST_VAR": "my_folder"}):
        path = normalize_path("$TREEFS_TEST_VAR/fs.dat", fallback="x.dat")
        assert path.endswith(os.path.join("my_folder", "fs.dat"))
        assert os.path.isabs(path)


def test_normalize_path_blank_uses_fallback() -> None:
    assert normalize_path("   ", fallback="fallback.dat") == os.path.abspath("fallback.dat")
    assert normalize_path(None, fallback="fallback.dat") == os.path.abspath("fallback.dat")


def test_safe_mkdir_success(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    ok, err = safe_mkdir(str(target))

    assert ok is True
    assert err is None
    assert target.is_dir()


def test_safe_mkdir_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "file.txt"
    blocker.write_text("x")

    ok, err = safe_mkdir(str(blocker / "sub"))

    assert ok is False
    assert err

from __future__ import annotations

"""
Host Filesystem Access.

The tree itself lives purely in memory; this module is the only place that
knows about the host disk layout: where treefs keeps its settings, default
snapshot and logs, and how user-supplied snapshot paths are resolved.
"""

import os
from typing import Optional, Tuple

from treefs.domain.constants import DEFAULT_SNAPSHOT_NAME

# Overrides the per-user data directory (isolated sessions, CI)
DATA_DIR_ENV = "TREEFS_HOME"
APP_DIR_NAME = "treefs"
UNIX_APP_DIR_NAME = ".treefs"


def get_user_data_dir() -> str:
    """
    Resolve (and create) the directory holding treefs settings and snapshots.

    Lookup order:
    - ``$TREEFS_HOME`` when set
    - Windows: ``%LOCALAPPDATA%/treefs`` (or ``%APPDATA%``)
    - elsewhere: ``~/.treefs``

    Returns:
        str: Absolute directory path. Creation failures are left for the
        first write to report.
    """
    path = os.environ.get(DATA_DIR_ENV, "").strip()

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    safe_mkdir(path)
    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Resolve a snapshot path as typed by the user.

    Expands ``~`` and environment variables and makes the result absolute.
    A blank path resolves ``fallback`` instead.
    """
    raw = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(raw)))


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create ``path`` and its parents if missing.

    Returns:
        Tuple[bool, Optional[str]]: Success flag and the OS error text on failure.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return False, str(e)
    return True, None

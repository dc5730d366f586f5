from __future__ import annotations

"""
Domain Constants.

Centralizes the structural tokens shared by the tree engine, the snapshot
codec and the command surface.
"""

from typing import FrozenSet

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TREE STRUCTURE
# -----------------------------------------------------------------------------
ROOT_NAME = "/"
PATH_SEPARATOR = "/"
PARENT_REF = ".."
CURRENT_REF = "."
RESERVED_NAMES: FrozenSet[str] = frozenset({PARENT_REF, CURRENT_REF})

# -----------------------------------------------------------------------------
# SNAPSHOT FORMAT
# -----------------------------------------------------------------------------
FIELD_SEPARATOR = "|"
FIELD_COUNT = 5
ESCAPE_CHAR = "\\"
DIRECTORY_FLAG = "1"
FILE_FLAG = "0"
DEFAULT_SNAPSHOT_NAME = "filesystem.dat"
SNAPSHOT_ENCODING = "utf-8"

from __future__ import annotations

"""
Filesystem Error Hierarchy.

Every recoverable condition raised by the tree engine and the snapshot codec
derives from FileSystemError. Callers report the message and carry on; none of
these errors leave the tree in a modified state. Messages are resolved from
the active locale where the error is raised.
"""

from typing import Optional

from treefs.utils.i18n import i18n


class FileSystemError(Exception):
    """Base class for all recoverable filesystem conditions."""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.name = name


class DuplicateNameError(FileSystemError):
    """A sibling with the requested name already exists."""


class NodeNotFoundError(FileSystemError):
    """No child with the requested name exists under the directory."""


class TypeMismatchError(FileSystemError):
    """The entry exists but is of the wrong kind (file vs. directory)."""


class InvalidNameError(FileSystemError):
    """The requested name cannot label an entry."""


class StorageUnavailableError(FileSystemError):
    """The snapshot stream could not be opened for reading or writing."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TreeFormatError(FileSystemError):
    """The snapshot stream does not describe a valid tree."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        if line_no is not None:
            message = i18n.t("errors.format.line", line=line_no, message=message)
        super().__init__(message)
        self.line_no = line_no

from __future__ import annotations

"""
Tree Engine.

Owns the root of the in-memory filesystem and the cursor ("current working
node"). Implements creation, lookup, navigation, path rendering and snapshot
persistence. Every failure is raised as a FileSystemError subclass before any
state is touched, so a failed call never mutates the tree or moves the cursor.
"""

import logging
import os
from typing import Iterator, List, Optional, Tuple

from treefs.core.services.codec import decode_tree, encode_tree
from treefs.domain.constants import PARENT_REF, PATH_SEPARATOR, ROOT_NAME, SNAPSHOT_ENCODING
from treefs.domain.errors import (
    DuplicateNameError,
    NodeNotFoundError,
    StorageUnavailableError,
    TreeFormatError,
    TypeMismatchError,
)
from treefs.domain.node_models import Node, check_entry_name, destroy_subtree
from treefs.infra.fs import safe_mkdir
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)


class FileSystemTree:
    """
    In-memory hierarchical filesystem with a single working-directory cursor.

    Attributes:
        root: The owned root directory.
        current: Non-owning reference to the cursor, always reachable from root.
    """

    def __init__(self) -> None:
        self.root: Node = Node(ROOT_NAME, is_directory=True)
        self.current: Node = self.root

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_directory(self, name: str) -> Node:
        """
        Create a directory under the cursor.

        Raises:
            InvalidNameError: If the name cannot label an entry.
            DuplicateNameError: If a sibling already uses the name.
        """
        node = self._create(name, is_directory=True)
        logger.debug(f"mkdir {self.render_path(node)}")
        return node

    def create_file(self, name: str, content: str = "") -> Node:
        """
        Create a file under the cursor.

        Raises:
            InvalidNameError: If the name cannot label an entry.
            DuplicateNameError: If a sibling already uses the name.
        """
        node = self._create(name, is_directory=False, content=content)
        logger.debug(f"touch {self.render_path(node)} ({len(content)} chars)")
        return node

    def _create(self, name: str, is_directory: bool, content: str = "") -> Node:
        check_entry_name(name)
        existing = self.lookup_child(self.current, name)
        if existing is not None:
            key = "errors.directory_exists" if existing.is_directory else "errors.file_exists"
            raise DuplicateNameError(i18n.t(key, name=name), name)

        node = Node(name, is_directory=is_directory, content="" if is_directory else content)
        self.current.attach(node)
        return node

    # -------------------------------------------------------------------------
    # Lookup and navigation
    # -------------------------------------------------------------------------

    @staticmethod
    def lookup_child(node: Node, name: str) -> Optional[Node]:
        """Return the first direct child of ``node`` named ``name``, or None."""
        for child in node.iter_children():
            if child.name == name:
                return child
        return None

    def change_directory(self, name: str) -> Node:
        """
        Move the cursor one level.

        ``..`` moves to the parent and is a no-op at the root. Any other name
        must be a directory directly under the cursor.

        Raises:
            NodeNotFoundError: If no child has that name.
            TypeMismatchError: If the child is a file.
        """
        if name == PARENT_REF:
            if self.current.parent is not None:
                self.current = self.current.parent
            return self.current

        target = self.lookup_child(self.current, name)
        if target is None:
            raise NodeNotFoundError(i18n.t("errors.directory_not_found", name=name), name)
        if not target.is_directory:
            raise TypeMismatchError(i18n.t("errors.not_a_directory", name=name), name)

        self.current = target
        return target

    def render_path(self, node: Optional[Node] = None) -> str:
        """
        Render the path from root to ``node`` (default: the cursor).

        The root renders as ``/`` and every further segment as ``name/``.
        """
        target = node if node is not None else self.current
        segments: List[str] = []
        while target.parent is not None:
            segments.append(target.name)
            target = target.parent
        return ROOT_NAME + "".join(f"{s}{PATH_SEPARATOR}" for s in reversed(segments))

    def list_children(self, node: Optional[Node] = None) -> List[str]:
        """Child names in chain order; directories carry a trailing ``/``."""
        target = node if node is not None else self.current
        return [
            f"{child.name}{PATH_SEPARATOR}" if child.is_directory else child.name
            for child in target.iter_children()
        ]

    def read_file(self, name: str) -> str:
        """
        Return the content of a file under the cursor.

        Raises:
            NodeNotFoundError: If no child has that name.
            TypeMismatchError: If the child is a directory.
        """
        target = self.lookup_child(self.current, name)
        if target is None:
            raise NodeNotFoundError(i18n.t("errors.file_not_found", name=name), name)
        if target.is_directory:
            raise TypeMismatchError(i18n.t("errors.not_a_file", name=name), name)
        return target.content

    def walk(self, node: Optional[Node] = None) -> Iterator[Tuple[int, Node]]:
        """Yield ``(depth, node)`` pairs of a subtree in pre-order."""
        start = node if node is not None else self.root
        stack: List[Tuple[int, Node]] = [(0, start)]
        while stack:
            depth, current = stack.pop()
            yield depth, current
            stack.extend((depth + 1, c) for c in reversed(current.children))

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    @staticmethod
    def destroy_subtree(node: Optional[Node]) -> int:
        """Discard a whole subtree. Not a single-entry delete."""
        return destroy_subtree(node)

    def reset(self) -> None:
        """Drop the whole tree and start again from an empty root."""
        released = self.destroy_subtree(self.root)
        self.root = Node(ROOT_NAME, is_directory=True)
        self.current = self.root
        logger.debug(f"Tree reset ({released} nodes released).")

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, path: str) -> int:
        """
        Write the whole tree to ``path``.

        Returns:
            int: Number of node records written.

        Raises:
            StorageUnavailableError: If the file cannot be opened for writing.
        """
        created, error = safe_mkdir(os.path.dirname(os.path.abspath(path)))
        if not created:
            raise StorageUnavailableError(i18n.t("errors.save_failed", path=path, error=error), path)

        try:
            with open(path, "w", encoding=SNAPSHOT_ENCODING, newline="\n") as f:
                count = encode_tree(self.root, f)
        except OSError as e:
            raise StorageUnavailableError(i18n.t("errors.save_failed", path=path, error=e), path) from e

        logger.info(f"Saved {count} entries to {path}")
        return count

    def load(self, path: str) -> int:
        """
        Replace the whole tree with the snapshot stored at ``path``.

        The stream is fully decoded before the current tree is discarded; the
        cursor is reset to the new root on success.

        Returns:
            int: Number of nodes in the restored tree.

        Raises:
            StorageUnavailableError: If the file cannot be opened.
            TreeFormatError: If the file does not describe a valid tree.
        """
        try:
            with open(path, "r", encoding=SNAPSHOT_ENCODING, newline="") as f:
                new_root = decode_tree(f)
        except OSError as e:
            raise StorageUnavailableError(i18n.t("errors.load_failed", path=path, error=e), path) from e
        except UnicodeDecodeError as e:
            raise TreeFormatError(i18n.t("errors.format.not_text", path=path, error=e)) from e

        self.destroy_subtree(self.root)
        self.root = new_root
        self.current = new_root

        count = sum(1 for _ in self.walk())
        logger.info(f"Loaded {count} entries from {path}")
        return count

from __future__ import annotations

"""
Filesystem Node Data Model.

Defines the single entity that represents both directories and files. Each
node owns an ordered list of children (most recently created first) and keeps
a navigational back-reference to its parent. The first-child/next-sibling view
of the tree is derived from that list.
"""

import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from treefs.domain.constants import PATH_SEPARATOR, RESERVED_NAMES
from treefs.domain.errors import InvalidNameError
from treefs.utils.i18n import i18n

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

def _now() -> int:
    return int(time.time())


def check_entry_name(name: str) -> str:
    """
    Validate a label for a non-root entry.

    Args:
        name: Candidate entry name.

    Returns:
        str: The name, unchanged.

    Raises:
        InvalidNameError: If the name is empty, reserved or holds a separator.
    """
    if not name:
        raise InvalidNameError(i18n.t("errors.name_empty"), name)
    if name in RESERVED_NAMES:
        raise InvalidNameError(i18n.t("errors.name_reserved", name=name), name)
    if PATH_SEPARATOR in name:
        raise InvalidNameError(
            i18n.t("errors.name_separator", name=name, separator=PATH_SEPARATOR), name
        )
    return name


@dataclass(eq=False)
class Node:
    """
    Represents one entry (directory or file) of the in-memory tree.

    Attributes:
        name: Label of the entry, unique among its siblings.
        is_directory: True for directories, False for files.
        content: Text payload. Only meaningful for files.
        created_at: Creation time in epoch seconds.
        modified_at: Modification time in epoch seconds. Defaults to created_at;
            values before 1970 (negative) are kept as given.
        parent: Containing directory. None for the root and detached nodes.
        children: Owned child entries, most recently created first.
    """
    name: str
    is_directory: bool
    content: str = ""
    created_at: int = field(default_factory=_now)
    modified_at: Optional[int] = None
    parent: Optional["Node"] = field(default=None, repr=False)
    children: List["Node"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.modified_at is None:
            self.modified_at = self.created_at

    # -------------------------------------------------------------------------
    # First-child / next-sibling view
    # -------------------------------------------------------------------------

    @property
    def first_child(self) -> Optional[Node]:
        return self.children[0] if self.children else None

    @property
    def next_sibling(self) -> Optional[Node]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for i, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[i + 1] if i + 1 < len(siblings) else None
        return None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def iter_children(self) -> Iterator[Node]:
        """Yield the child chain in sibling order."""
        return iter(self.children)

    def attach(self, child: Node) -> None:
        """
        Prepend a child to this directory's chain and bind its parent link.

        Args:
            child: Detached node to adopt.
        """
        child.parent = self
        self.children.insert(0, child)

    def adopt_last(self, child: Node) -> None:
        """Append a child at the tail of the chain (used when rebuilding a stream)."""
        child.parent = self
        self.children.append(child)


def destroy_subtree(node: Optional[Node]) -> int:
    """
    Tear down a subtree, severing every child and parent link.

    Walks with an explicit stack so deep trees do not exhaust the interpreter
    call stack. The parent link of the subtree root is followed only to detach
    it from its container.

    Args:
        node: Root of the subtree to discard.

    Returns:
        int: Number of nodes released.
    """
    if node is None:
        return 0

    if node.parent is not None:
        node.parent.children = [c for c in node.parent.children if c is not node]

    released = 0
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        stack.extend(current.children)
        current.children = []
        current.parent = None
        released += 1
    return released

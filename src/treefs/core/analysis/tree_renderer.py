from __future__ import annotations

"""
Tree Renderer.

Converts an in-memory node subtree into a visual ASCII representation using
standard connectors. Children are emitted in sibling-chain order, matching
the listing produced by the engine.
"""

from typing import List, Tuple

from treefs.domain.constants import PATH_SEPARATOR
from treefs.domain.node_models import Node

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(node: Node, show_sizes: bool = False) -> List[str]:
    """
    Render a subtree, headed by the label of its root.

    Args:
        node: Subtree root.
        show_sizes: Append the content length of every file.

    Returns:
        List[str]: Visual lines of the subtree.
    """
    head = node.name if node.is_root else _label(node, show_sizes)
    lines: List[str] = [head]
    render_tree_structure(node, lines, prefix="", show_sizes=show_sizes)
    return lines


def render_tree_structure(
        node: Node,
        lines: List[str],
        prefix: str = "",
        show_sizes: bool = False,
) -> None:
    """
    Append one line per descendant of ``node`` to ``lines``.

    Uses an explicit stack of pending entries, so the depth of the subtree
    is not bounded by the interpreter recursion limit.

    Args:
        node: Directory whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation placed before every emitted line.
        show_sizes: Append the content length of every file.
    """
    # (entry, prefix of its line, is last in its chain)
    stack: List[Tuple[Node, str, bool]] = _pending(node, prefix)

    while stack:
        child, child_prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{child_prefix}{connector}{_label(child, show_sizes)}")

        if child.is_directory and child.children:
            nested = child_prefix + ("    " if is_last else "│   ")
            stack.extend(_pending(child, nested))


def _pending(node: Node, prefix: str) -> List[Tuple[Node, str, bool]]:
    """Children of ``node`` in pop order (first child on top of the stack)."""
    entries = node.children
    last = len(entries) - 1
    return [(child, prefix, i == last) for i, child in reversed(list(enumerate(entries)))]


def _label(node: Node, show_sizes: bool) -> str:
    if node.is_directory:
        return f"{node.name}{PATH_SEPARATOR}"
    if show_sizes:
        return f"{node.name} ({len(node.content)} chars)"
    return node.name

from __future__ import annotations

"""
Snapshot Codec.

Serializes a node subtree into a line-oriented text stream and rebuilds an
isomorphic subtree from it. One record per node:

    name|isDirectory(0/1)|content|createdAt|modifiedAt

Records follow a pre-order, sibling-interleaved walk: the node itself, then
its child chain, then its sibling chain. An absent child or absent sibling is
written as an empty line, so every chain is closed by exactly one empty line.
Fields are escaped (backslash, separator, CR, LF) so arbitrary text survives;
text free of those characters is written unchanged.
"""

import io
import logging
from typing import Iterable, Iterator, List, Optional, Set, TextIO, Tuple

from treefs.domain.constants import (
    DIRECTORY_FLAG,
    ESCAPE_CHAR,
    FIELD_COUNT,
    FIELD_SEPARATOR,
    FILE_FLAG,
)
from treefs.domain.errors import InvalidNameError, TreeFormatError
from treefs.domain.node_models import Node, check_entry_name
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

_ESCAPES = {
    ESCAPE_CHAR: ESCAPE_CHAR + ESCAPE_CHAR,
    FIELD_SEPARATOR: ESCAPE_CHAR + "p",
    "\n": ESCAPE_CHAR + "n",
    "\r": ESCAPE_CHAR + "r",
}
_UNESCAPES = {
    ESCAPE_CHAR: ESCAPE_CHAR,
    "p": FIELD_SEPARATOR,
    "n": "\n",
    "r": "\r",
}

# -----------------------------------------------------------------------------
# FIELD ESCAPING
# -----------------------------------------------------------------------------

def escape_field(text: str) -> str:
    """Escape a raw field so it contains no separator and no line break."""
    if not any(ch in text for ch in _ESCAPES):
        return text
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape_field(text: str, line_no: Optional[int] = None) -> str:
    """
    Reverse escape_field.

    Raises:
        TreeFormatError: On a dangling or unknown escape sequence.
    """
    if ESCAPE_CHAR not in text:
        return text

    out: List[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != ESCAPE_CHAR:
            out.append(ch)
            continue
        code = next(chars, None)
        if code is None or code not in _UNESCAPES:
            raise TreeFormatError(i18n.t("errors.format.bad_escape", field=text), line_no)
        out.append(_UNESCAPES[code])
    return "".join(out)

# -----------------------------------------------------------------------------
# RECORDS
# -----------------------------------------------------------------------------

def format_record(node: Node) -> str:
    """Render one node as a single snapshot line (without terminator)."""
    return FIELD_SEPARATOR.join([
        escape_field(node.name),
        DIRECTORY_FLAG if node.is_directory else FILE_FLAG,
        escape_field(node.content),
        str(int(node.created_at)),
        str(int(node.modified_at)),
    ])


def parse_record(line: str, line_no: Optional[int] = None) -> Node:
    """
    Materialize a detached node from one snapshot line.

    Args:
        line: Record text without its line terminator.
        line_no: 1-based position in the stream, for diagnostics.

    Returns:
        Node: A node with no parent and no children.

    Raises:
        TreeFormatError: If the record is malformed.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise TreeFormatError(
            i18n.t("errors.format.field_count", expected=FIELD_COUNT, found=len(fields)), line_no
        )

    raw_name, flag, raw_content, created, modified = fields
    if flag not in (DIRECTORY_FLAG, FILE_FLAG):
        raise TreeFormatError(i18n.t("errors.format.bad_flag", flag=flag), line_no)

    try:
        created_at = int(created)
        modified_at = int(modified)
    except ValueError:
        raise TreeFormatError(i18n.t("errors.format.bad_timestamp"), line_no) from None

    return Node(
        name=unescape_field(raw_name, line_no),
        is_directory=(flag == DIRECTORY_FLAG),
        content=unescape_field(raw_content, line_no),
        created_at=created_at,
        modified_at=modified_at,
    )

# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def iter_records(root: Node) -> Iterator[str]:
    """
    Yield the snapshot lines of a subtree in sibling-interleaved pre-order.

    Equivalent to the recursive definition
    ``encode(n) = record(n), encode(n.first_child), encode(n.next_sibling)``
    with ``encode(None)`` producing an empty line, but driven by an explicit
    stack of child iterators.
    """
    yield format_record(root)
    stack: List[Iterator[Node]] = [root.iter_children()]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            yield ""
            continue
        yield format_record(child)
        stack.append(child.iter_children())
    # The subtree root is written without siblings.
    yield ""


def encode_tree(root: Node, stream: TextIO) -> int:
    """
    Write a subtree to a text stream.

    Returns:
        int: Number of node records written.
    """
    count = 0
    for record in iter_records(root):
        if record:
            count += 1
        stream.write(record + "\n")
    logger.debug(f"Encoded {count} node records.")
    return count


def encode_to_string(root: Node) -> str:
    buffer = io.StringIO()
    encode_tree(root, buffer)
    return buffer.getvalue()

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def _numbered_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    for line_no, raw in enumerate(lines, start=1):
        yield line_no, raw.rstrip("\r\n")


def decode_tree(lines: Iterable[str]) -> Node:
    """
    Rebuild a subtree from snapshot lines.

    A record opens a node whose child chain is read next; an empty line (or
    end of stream) closes the innermost open chain, and the records after it
    are siblings under the same parent.

    Args:
        lines: Any iterable of lines, e.g. an open text file.

    Returns:
        Node: The reconstructed root, detached from any parent.

    Raises:
        TreeFormatError: If the stream does not describe a valid tree.
    """
    records = _numbered_lines(lines)

    first = next(records, None)
    if first is None or not first[1]:
        raise TreeFormatError(i18n.t("errors.format.empty"), 1)

    root = parse_record(first[1], first[0])
    if not root.is_directory:
        raise TreeFormatError(i18n.t("errors.format.root_not_directory"), first[0])

    # Each open chain tracks its owner and the names already used in it.
    stack: List[Tuple[Node, Set[str]]] = [(root, set())]
    count = 1

    for line_no, text in records:
        if not stack:
            if text:
                raise TreeFormatError(i18n.t("errors.format.root_siblings"), line_no)
            continue

        if not text:
            stack.pop()
            continue

        node = parse_record(text, line_no)
        parent, seen = stack[-1]
        if not parent.is_directory:
            raise TreeFormatError(i18n.t("errors.format.file_children", name=parent.name), line_no)
        try:
            check_entry_name(node.name)
        except InvalidNameError as e:
            raise TreeFormatError(e.message, line_no) from None
        if node.name in seen:
            raise TreeFormatError(
                i18n.t("errors.format.duplicate", name=node.name, parent=parent.name), line_no
            )

        seen.add(node.name)
        parent.adopt_last(node)
        stack.append((node, set()))
        count += 1

    logger.debug(f"Decoded {count} node records.")
    return root


def decode_from_string(text: str) -> Node:
    return decode_tree(io.StringIO(text))

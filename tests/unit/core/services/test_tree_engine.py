from __future__ import annotations

"""
Unit tests for the Tree Engine.

Verifies creation ordering, duplicate detection, single-level navigation,
path rendering and the guarantee that failed operations leave the tree and
the cursor untouched.
"""

import pytest

from treefs.core.services.tree_engine import FileSystemTree
from treefs.domain.errors import (
    DuplicateNameError,
    InvalidNameError,
    NodeNotFoundError,
    TypeMismatchError,
)

# -----------------------------------------------------------------------------
# CREATION
# -----------------------------------------------------------------------------

def test_children_listed_most_recent_first(tree: FileSystemTree) -> None:
    tree.create_directory("alpha")
    tree.create_file("beta.txt", "b")
    tree.create_directory("gamma")

    assert tree.list_children() == ["gamma/", "beta.txt", "alpha/"]


def test_new_node_is_bound_to_cursor(tree: FileSystemTree) -> None:
    tree.create_directory("home")
    tree.change_directory("home")
    node = tree.create_file("a.txt", "x")

    assert node.parent is tree.current
    assert tree.current.first_child is node


@pytest.mark.parametrize("first_is_dir", [True, False])
@pytest.mark.parametrize("second_is_dir", [True, False])
def test_duplicate_name_rejected_regardless_of_kind(
        tree: FileSystemTree, first_is_dir: bool, second_is_dir: bool
) -> None:
    """A name is taken whether the existing sibling is a file or a directory."""
    create = {True: tree.create_directory, False: tree.create_file}
    create[first_is_dir]("entry")

    with pytest.raises(DuplicateNameError):
        create[second_is_dir]("entry")

    assert len(tree.root.children) == 1


def test_same_name_allowed_in_different_directories(tree: FileSystemTree) -> None:
    tree.create_directory("a")
    tree.create_directory("b")
    tree.change_directory("a")
    tree.create_file("same.txt")
    tree.change_directory("..")
    tree.change_directory("b")
    tree.create_file("same.txt")

    assert tree.list_children() == ["same.txt"]


@pytest.mark.parametrize("name", ["", "..", ".", "a/b"])
def test_invalid_names_rejected(tree: FileSystemTree, name: str) -> None:
    with pytest.raises(InvalidNameError):
        tree.create_directory(name)
    assert tree.root.children == []


def test_directories_never_carry_content(tree: FileSystemTree) -> None:
    node = tree.create_directory("d")
    assert node.content == ""
    assert node.is_directory

# -----------------------------------------------------------------------------
# NAVIGATION
# -----------------------------------------------------------------------------

def test_cd_parent_at_root_is_noop(tree: FileSystemTree) -> None:
    tree.change_directory("..")
    assert tree.current is tree.root
    assert tree.render_path() == "/"


def test_cd_parent_returns_to_former_parent(populated_tree: FileSystemTree) -> None:
    populated_tree.change_directory("home")
    home = populated_tree.current
    populated_tree.change_directory("user")

    populated_tree.change_directory("..")

    assert populated_tree.current is home


def test_cd_into_missing_name(populated_tree: FileSystemTree) -> None:
    with pytest.raises(NodeNotFoundError):
        populated_tree.change_directory("nowhere")
    assert populated_tree.current is populated_tree.root


def test_cd_into_file_is_type_mismatch(populated_tree: FileSystemTree) -> None:
    with pytest.raises(TypeMismatchError):
        populated_tree.change_directory("readme.md")
    assert populated_tree.current is populated_tree.root


def test_cd_does_not_resolve_multi_segment_paths(populated_tree: FileSystemTree) -> None:
    with pytest.raises(NodeNotFoundError):
        populated_tree.change_directory("home/user")
    assert populated_tree.current is populated_tree.root


@pytest.mark.parametrize("depth", [1, 2, 5, 20])
def test_render_path_after_repeated_mkdir_cd(tree: FileSystemTree, depth: int) -> None:
    for _ in range(depth):
        tree.create_directory("X")
        tree.change_directory("X")

    assert tree.render_path() == "/" + "X/" * depth


def test_render_path_of_arbitrary_node(populated_tree: FileSystemTree) -> None:
    home = populated_tree.lookup_child(populated_tree.root, "home")
    user = populated_tree.lookup_child(home, "user")
    notes = populated_tree.lookup_child(user, "notes.txt")

    assert populated_tree.render_path(notes) == "/home/user/notes.txt/"
    assert populated_tree.render_path(populated_tree.root) == "/"

# -----------------------------------------------------------------------------
# READING
# -----------------------------------------------------------------------------

def test_demo_sequence_reads_back_content(tree: FileSystemTree) -> None:
    tree.create_directory("home")
    tree.change_directory("home")
    tree.create_directory("user")
    tree.change_directory("user")
    tree.create_file("notes.txt", "Hello World!")

    assert tree.list_children() == ["notes.txt"]
    assert tree.read_file("notes.txt") == "Hello World!"
    assert tree.render_path() == "/home/user/"


def test_read_missing_file(tree: FileSystemTree) -> None:
    with pytest.raises(NodeNotFoundError):
        tree.read_file("ghost.txt")


def test_read_directory_is_type_mismatch(populated_tree: FileSystemTree) -> None:
    with pytest.raises(TypeMismatchError):
        populated_tree.read_file("home")


def test_lookup_child_returns_none_when_absent(populated_tree: FileSystemTree) -> None:
    assert populated_tree.lookup_child(populated_tree.root, "missing") is None
    assert populated_tree.lookup_child(populated_tree.root, "var").is_directory


def test_walk_is_preorder_in_chain_order(populated_tree: FileSystemTree) -> None:
    names = [(depth, node.name) for depth, node in populated_tree.walk()]

    assert names == [
        (0, "/"),
        (1, "var"),
        (1, "home"),
        (2, "user"),
        (3, "notes.txt"),
        (3, "todo.txt"),
        (3, "projects"),
        (2, "guest"),
        (1, "readme.md"),
    ]

# -----------------------------------------------------------------------------
# TEARDOWN
# -----------------------------------------------------------------------------

def test_reset_discards_everything(populated_tree: FileSystemTree) -> None:
    old_root = populated_tree.root
    populated_tree.change_directory("home")

    populated_tree.reset()

    assert populated_tree.root is not old_root
    assert populated_tree.current is populated_tree.root
    assert populated_tree.list_children() == []
    assert old_root.children == []


def test_parent_links_consistent_after_mutations(populated_tree: FileSystemTree) -> None:
    for _, node in populated_tree.walk():
        for child in node.children:
            assert child.parent is node

from __future__ import annotations

"""
Unit tests for the Node Model and Tree Structure.

Verifies:
1. Name and size validation rules (including both size policies).
2. Parent/child wiring performed together by _attach/_detach.
3. Weak parent back-links and derived attributes (depth, path).
4. Deterministic pre-order traversal.
"""

import gc
from datetime import datetime

import pytest

from memfs.domain.errors import InvalidNameError, InvalidSizeError
from memfs.domain.nodes import (
    Directory,
    File,
    NodeKind,
    validate_name,
    validate_size,
)


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("bad", [None, "", "a" * 33, 42])
def test_invalid_names_are_rejected(bad):
    with pytest.raises(InvalidNameError):
        validate_name(bad)


def test_name_length_boundary():
    assert validate_name("a") == "a"
    assert validate_name("a" * 32) == "a" * 32


def test_size_policy_positive_rejects_zero_and_negative():
    assert validate_size(1) == 1
    with pytest.raises(InvalidSizeError):
        validate_size(0)
    with pytest.raises(InvalidSizeError):
        validate_size(-123)


def test_size_policy_non_negative_accepts_zero():
    assert validate_size(0, "non_negative") == 0
    with pytest.raises(InvalidSizeError):
        validate_size(-1, "non_negative")


@pytest.mark.parametrize("bad", [True, 1.5, "100", None])
def test_non_integer_sizes_are_rejected(bad):
    with pytest.raises(InvalidSizeError):
        validate_size(bad)


def test_unknown_size_policy_is_a_programming_error():
    with pytest.raises(ValueError):
        validate_size(10, "whatever")


def test_file_constructor_attaches_name_to_size_error():
    with pytest.raises(InvalidSizeError) as exc_info:
        File("broken.bin", -5)
    assert exc_info.value.name == "broken.bin"
    assert exc_info.value.size == -5


# -----------------------------------------------------------------------------
# Node attributes
# -----------------------------------------------------------------------------

def test_node_attributes_and_variant_tags():
    before = datetime.now()
    d = Directory("docs")
    f = File("a.txt", 10)

    assert d.kind is NodeKind.DIRECTORY and d.is_directory and not d.is_file
    assert f.kind is NodeKind.FILE and f.is_file and not f.is_directory
    assert f.size == 10
    assert d.creation_time >= before
    assert d.parent is None
    assert d.child_count == 0


def test_str_includes_details():
    f = File("a.txt", 10)
    d = Directory("docs")
    assert str(f).startswith("a.txt [size=10 bytes, created=")
    assert str(d).startswith("docs [created=")


# -----------------------------------------------------------------------------
# Tree structure
# -----------------------------------------------------------------------------

def test_attach_and_detach_wire_both_directions():
    parent = Directory("root")
    child = File("a.txt", 10)

    parent._attach(child)
    assert parent.children["a.txt"] is child
    assert child.parent is parent

    parent._detach(child)
    assert "a.txt" not in parent.children
    assert child.parent is None


def test_children_view_is_read_only():
    parent = Directory("root")
    with pytest.raises(TypeError):
        parent.children["x"] = File("x", 1)  # type: ignore[index]


def test_attach_refuses_duplicates_and_attached_nodes():
    a = Directory("a")
    b = Directory("b")
    child = File("f", 1)
    a._attach(child)

    with pytest.raises(ValueError):
        b._attach(child)
    with pytest.raises(ValueError):
        a._attach(File("f", 2))
    with pytest.raises(ValueError):
        a._attach(a)


def test_detach_refuses_strangers():
    a = Directory("a")
    with pytest.raises(ValueError):
        a._detach(File("f", 1))


def test_parent_link_is_weak():
    child = File("f", 1)
    parent = Directory("p")
    parent._attach(child)

    del parent
    gc.collect()
    assert child.parent is None


def test_depth_and_path():
    root = Directory("root")
    docs = Directory("Documents")
    work = Directory("Work")
    root._attach(docs)
    docs._attach(work)

    assert root.depth == 0
    assert work.depth == 2
    assert work.path == "root/Documents/Work"


def test_walk_is_preorder_with_sorted_siblings():
    root = Directory("root")
    b = Directory("b")
    a = Directory("a")
    root._attach(b)
    root._attach(a)
    a._attach(File("a2", 1))
    a._attach(File("a1", 1))
    b._attach(File("b1", 1))

    walked = [(depth, node.name) for depth, node in root.walk()]
    assert walked == [
        (0, "root"),
        (1, "a"),
        (2, "a1"),
        (2, "a2"),
        (1, "b"),
        (2, "b1"),
    ]
    assert [n.name for n in root.iter_descendants()] == ["a", "a1", "a2", "b", "b1"]

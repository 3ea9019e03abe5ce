from __future__ import annotations

"""
Filesystem Node Model and Tree Structure.

Defines the two node variants (Directory and File) sharing a common base
record, plus the ownership links that bind them into a rooted tree. A
directory owns its children outright; the child keeps only a weak
back-reference to its parent, used for traversal and detachment.

This module knows nothing about the name index or the largest-file
tracker. Keeping those consistent is the manager's job.
"""

import weakref
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from memfs.domain.constants import (
    MAX_NAME_LENGTH,
    SIZE_POLICIES,
    SIZE_POLICY_POSITIVE,
)
from memfs.domain.errors import InvalidNameError, InvalidSizeError


class NodeKind(Enum):
    """Variant tag carried by every node."""
    DIRECTORY = "directory"
    FILE = "file"


# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_name(name: Any) -> str:
    """
    Validate a node name against the naming rules.

    Args:
        name: Candidate name.

    Returns:
        str: The validated name.

    Raises:
        InvalidNameError: If the name is None, not a string, empty or longer
            than MAX_NAME_LENGTH characters.
    """
    if name is None:
        raise InvalidNameError("Name cannot be null")
    if not isinstance(name, str):
        raise InvalidNameError(f"Name must be a string, got {type(name).__name__}")
    if not name:
        raise InvalidNameError("Name cannot be empty", name=name)
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            f"Name cannot be longer than {MAX_NAME_LENGTH} characters: {name}",
            name=name,
        )
    return name


def validate_size(size: Any, policy: str = SIZE_POLICY_POSITIVE) -> int:
    """
    Validate a file size under the given policy.

    Args:
        size: Candidate size in bytes.
        policy: Either 'positive' (size > 0) or 'non_negative' (size >= 0).

    Returns:
        int: The validated size.

    Raises:
        InvalidSizeError: If size is not an integer or violates the policy.
        ValueError: If the policy identifier is unknown.
    """
    if policy not in SIZE_POLICIES:
        raise ValueError(f"Unknown size policy: {policy!r}")

    # bool is an int subclass but never a meaningful size
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSizeError(
            f"File size must be an integer, got {type(size).__name__}", size=size
        )
    if size < 0:
        raise InvalidSizeError(f"File size cannot be negative: {size}", size=size)
    if size == 0 and policy == SIZE_POLICY_POSITIVE:
        raise InvalidSizeError(f"File size must be positive: {size}", size=size)
    return size


# -----------------------------------------------------------------------------
# NODE VARIANTS
# -----------------------------------------------------------------------------

class FileSystemNode:
    """
    Shared base record for files and directories.

    Attributes:
        kind: Variant tag, fixed per subclass.
    """

    kind: NodeKind

    def __init__(self, name: str) -> None:
        self._name = validate_name(name)
        self._creation_time = datetime.now()
        self._parent_ref: Optional[weakref.ReferenceType[Directory]] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def creation_time(self) -> datetime:
        return self._creation_time

    @property
    def parent(self) -> Optional[Directory]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def depth(self) -> int:
        """Number of ancestors above this node (root is 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def path(self) -> str:
        """Slash-joined names from the topmost ancestor. Informational only."""
        parts: List[str] = []
        node: Optional[FileSystemNode] = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return "/".join(reversed(parts))

    def _set_parent(self, parent: Optional[Directory]) -> None:
        """Rewire the back-link. Only Directory._attach/_detach call this."""
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def __str__(self) -> str:
        return f"{self._name} [created={self._creation_time.isoformat()}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class File(FileSystemNode):
    """A leaf node carrying a size in bytes."""

    kind = NodeKind.FILE

    def __init__(self, name: str, size: int, *, size_policy: str = SIZE_POLICY_POSITIVE) -> None:
        super().__init__(name)
        try:
            self._size = validate_size(size, size_policy)
        except InvalidSizeError as e:
            e.name = self._name
            raise

    @property
    def size(self) -> int:
        return self._size

    def __str__(self) -> str:
        return f"{self._name} [size={self._size} bytes, created={self._creation_time.isoformat()}]"

    def __repr__(self) -> str:
        return f"File(name={self._name!r}, size={self._size})"


class Directory(FileSystemNode):
    """An inner node owning a name-keyed collection of children."""

    kind = NodeKind.DIRECTORY

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._children: Dict[str, FileSystemNode] = {}

    @property
    def children(self) -> Mapping[str, FileSystemNode]:
        """Read-only view of the children keyed by name."""
        return MappingProxyType(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    def get_child(self, name: str) -> Optional[FileSystemNode]:
        return self._children.get(name)

    # -------------------------------------------------------------------------
    # OWNERSHIP (driven by FileSystemManager only)
    # -------------------------------------------------------------------------

    def _attach(self, child: FileSystemNode) -> None:
        """
        Attach a node: key it by name and point its parent link here.

        Raises:
            ValueError: If the name is already a child key or the node
                already belongs to another directory.
        """
        if child.name in self._children:
            raise ValueError(f"Directory '{self._name}' already has a child named '{child.name}'")
        if child.parent is not None:
            raise ValueError(f"Node '{child.name}' is already attached to '{child.parent.name}'")
        if child is self:
            raise ValueError("A directory cannot contain itself")

        self._children[child.name] = child
        child._set_parent(self)

    def _detach(self, child: FileSystemNode) -> None:
        """
        Detach a node: drop its key and clear its parent link.

        Raises:
            ValueError: If the node is not a child of this directory.
        """
        if self._children.get(child.name) is not child:
            raise ValueError(f"Node '{child.name}' is not a child of '{self._name}'")

        del self._children[child.name]
        child._set_parent(None)

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def walk(self) -> Iterator[Tuple[int, FileSystemNode]]:
        """
        Yield (depth, node) pairs in pre-order depth-first order.

        The directory itself comes first at depth 0. Siblings are visited in
        name order so output is deterministic.
        """
        stack: List[Tuple[int, FileSystemNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            if isinstance(node, Directory):
                # Reverse so the smallest name is popped first
                for name in sorted(node._children, reverse=True):
                    stack.append((depth + 1, node._children[name]))

    def iter_descendants(self) -> Iterator[FileSystemNode]:
        """Yield every node below this directory, excluding itself."""
        for depth, node in self.walk():
            if depth > 0:
                yield node

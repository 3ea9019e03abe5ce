from __future__ import annotations

"""
Flat Name Index.

Maps every live node name to its node, regardless of depth, so lookups
never traverse the tree. Names are global identifiers: the index refuses
a second node under a name it already holds.
"""

from typing import Any, Dict, Iterator, Optional, Set

from memfs.domain.errors import NameAlreadyExistsError, NodeNotFoundError
from memfs.domain.nodes import FileSystemNode


class NameIndex:
    """Single name -> node mapping spanning the whole tree."""

    def __init__(self) -> None:
        self._nodes: Dict[str, FileSystemNode] = {}

    def insert(self, node: FileSystemNode) -> None:
        """
        Register a node under its name.

        Raises:
            NameAlreadyExistsError: If the name is already indexed.
        """
        if node.name in self._nodes:
            raise NameAlreadyExistsError(f"Name already exists: {node.name}", name=node.name)
        self._nodes[node.name] = node

    def get(self, name: str) -> Optional[FileSystemNode]:
        if not isinstance(name, str):
            return None
        return self._nodes.get(name)

    def lookup(self, name: str) -> FileSystemNode:
        """
        Resolve a name to its node.

        Raises:
            NodeNotFoundError: If the name is not indexed.
        """
        node = self.get(name)
        if node is None:
            raise NodeNotFoundError(f"Node not found: {name}", name=name)
        return node

    def remove(self, name: str) -> FileSystemNode:
        """
        Drop a name from the index and return the node it pointed to.

        Raises:
            NodeNotFoundError: If the name is not indexed.
        """
        try:
            return self._nodes.pop(name)
        except KeyError:
            raise NodeNotFoundError(f"Node not found: {name}", name=name) from None

    def names(self) -> Set[str]:
        return set(self._nodes)

    def __contains__(self, name: Any) -> bool:
        # Unhashable or non-string candidates are simply not indexed
        return isinstance(name, str) and name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

from __future__ import annotations

"""
Filesystem Manager.

Orchestrates the three coupled structures of the simulator:

1. The node tree rooted at the 'root' directory (ownership).
2. The flat name index (O(1) lookup by globally unique name).
3. The largest-file tracker (heap or pointer strategy).

Every public mutation validates everything it can before touching any of
the three structures, so a failing call leaves them exactly as they were.

Complexity summary (N nodes, F files):
    add_directory     O(1)
    add_file          O(log F) heap / O(1) pointer
    get_biggest_file  amortised O(1)
    get_file_size     O(1)
    delete            O(subtree) plus tracker cost per removed file
    show_filesystem   O(N) per iteration, lazily
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from memfs.core.name_index import NameIndex
from memfs.core.tracker import LargestFileTracker, create_tracker
from memfs.core.tree_renderer import TreeView, render_tree
from memfs.core.validator import validate_config
from memfs.domain.constants import ROOT_NAME
from memfs.domain.errors import (
    CannotDeleteRootError,
    DirectoryNotFoundError,
    FileSystemError,
    InconsistentStateError,
    NameAlreadyExistsError,
    NotAFileError,
)
from memfs.domain.nodes import Directory, File, FileSystemNode

logger = logging.getLogger(__name__)


class FileSystemManager:
    """
    In-memory filesystem keeping tree, index and tracker consistent.

    Args:
        config: Optional configuration overrides (see memfs.domain.config).
            Invalid values raise immediately.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config, _ = validate_config(dict(config or {}), strict=True)

        self._root = Directory(ROOT_NAME)
        self._index = NameIndex()
        self._index.insert(self._root)
        self._tracker: LargestFileTracker = create_tracker(self._config["tracker_strategy"])

        logger.debug(
            f"Filesystem initialised (tracker={self._tracker.strategy}, "
            f"size_policy={self.size_policy})"
        )

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Directory:
        return self._root

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @property
    def size_policy(self) -> str:
        return self._config["size_policy"]

    @property
    def tracker_strategy(self) -> str:
        return self._tracker.strategy

    @property
    def file_count(self) -> int:
        return len(self._tracker)

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def add_directory(self, parent_name: str, dir_name: str) -> Directory:
        """
        Create a directory under an existing directory.

        Raises:
            DirectoryNotFoundError: parent_name is not a live directory.
            NameAlreadyExistsError: dir_name is already used anywhere.
            InvalidNameError: dir_name is malformed.
        """
        try:
            parent = self._resolve_parent(parent_name)
            self._ensure_name_free(dir_name)
            directory = Directory(dir_name)
        except FileSystemError as e:
            logger.debug(f"add_directory({parent_name!r}, {dir_name!r}) rejected: {e}")
            raise

        parent._attach(directory)
        self._index.insert(directory)

        logger.debug(f"Directory added: {directory.path}")
        return directory

    # Name used by the original command set
    add_dir = add_directory

    def add_file(self, parent_name: str, file_name: str, size: int) -> File:
        """
        Create a file under an existing directory and start tracking it.

        Raises:
            DirectoryNotFoundError: parent_name is not a live directory.
            NameAlreadyExistsError: file_name is already used anywhere.
            InvalidNameError: file_name is malformed.
            InvalidSizeError: size violates the active size policy.
        """
        try:
            parent = self._resolve_parent(parent_name)
            self._ensure_name_free(file_name)
            file = File(file_name, size, size_policy=self.size_policy)
        except FileSystemError as e:
            logger.debug(f"add_file({parent_name!r}, {file_name!r}, {size!r}) rejected: {e}")
            raise

        parent._attach(file)
        self._index.insert(file)
        self._tracker.add(file)

        logger.debug(f"File added: {file.path} ({file.size} bytes)")
        return file

    def delete(self, name: str) -> int:
        """
        Delete a file, or a directory together with its whole subtree.

        The node is detached from its parent first; then every node of the
        detached subtree is dropped from the index and every file from the
        tracker.

        Returns:
            int: Number of nodes removed (the node plus its descendants).

        Raises:
            NodeNotFoundError: name is not indexed.
            CannotDeleteRootError: name refers to the root directory.
        """
        try:
            node = self._index.lookup(name)
            if node is self._root:
                raise CannotDeleteRootError("Cannot delete root directory", name=name)
            parent = node.parent
            if parent is None:
                raise InconsistentStateError(f"Indexed node has no parent: {name}", name=name)
        except FileSystemError as e:
            logger.debug(f"delete({name!r}) rejected: {e}")
            raise

        # Collect before mutating so the unwiring below cannot fail halfway
        descendants: List[FileSystemNode] = []
        if isinstance(node, Directory):
            descendants = list(node.iter_descendants())

        parent._detach(node)

        for child in descendants:
            self._index.remove(child.name)
        self._index.remove(node.name)

        removed_files = [n for n in descendants if isinstance(n, File)]
        if isinstance(node, File):
            removed_files.append(node)
        self._tracker.discard_many(removed_files)

        removed = len(descendants) + 1
        logger.debug(
            f"Deleted '{name}' from '{parent.name}': {removed} node(s), {len(removed_files)} file(s)"
        )
        return removed

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def get_biggest_file(self) -> str:
        """
        Return the name of the largest file (newest wins on equal sizes).

        Raises:
            EmptyFileSystemError: No files are present.
        """
        return self._tracker.largest().name

    def get_file_size(self, name: str) -> int:
        """
        Return the size of a file.

        Raises:
            NodeNotFoundError: name is not indexed.
            NotAFileError: name refers to a directory.
        """
        node = self._index.lookup(name)
        if not isinstance(node, File):
            raise NotAFileError(f"Node is not a file: {name}", name=name)
        return node.size

    def get_node(self, name: str) -> FileSystemNode:
        """Resolve a name to its node, raising NodeNotFoundError if absent."""
        return self._index.lookup(name)

    def exists(self, name: str) -> bool:
        return name in self._index

    def iter_files(self) -> Iterator[File]:
        """Yield every live file in pre-order."""
        for _, node in self._root.walk():
            if isinstance(node, File):
                yield node

    def show_filesystem(self, *, style: Optional[str] = None, indent: Optional[int] = None) -> TreeView:
        """
        Return a lazy, restartable rendering of the tree.

        Each iteration over the returned view performs a fresh pre-order walk
        from root, one line per node indented by depth.
        """
        return TreeView(
            self._root,
            style=style or self._config["render_style"],
            indent=self._config["indent_width"] if indent is None else indent,
        )

    def render(self) -> str:
        """Render the current tree as a single string."""
        return render_tree(
            self._root,
            style=self._config["render_style"],
            indent=self._config["indent_width"],
        )

    def check_consistency(self) -> None:
        """
        Cross-check tree, index and tracker.

        Raises:
            InconsistentStateError: On the first violated invariant.
        """
        reachable: Dict[str, FileSystemNode] = {}
        for _, node in self._root.walk():
            if node.name in reachable:
                raise InconsistentStateError(f"Duplicate name in tree: {node.name}", name=node.name)
            reachable[node.name] = node

            if node is not self._root:
                parent = node.parent
                if parent is None or parent.children.get(node.name) is not node:
                    raise InconsistentStateError(f"Broken parent link: {node.name}", name=node.name)

        indexed = self._index.names()
        if indexed != set(reachable):
            stale = sorted(indexed - set(reachable))
            missing = sorted(set(reachable) - indexed)
            raise InconsistentStateError(f"Index mismatch: stale={stale}, missing={missing}")
        for name, node in reachable.items():
            if self._index.get(name) is not node:
                raise InconsistentStateError(f"Index points to a different node: {name}", name=name)

        files = [n for n in reachable.values() if isinstance(n, File)]
        if len(files) != len(self._tracker) or any(f not in self._tracker for f in files):
            raise InconsistentStateError("Tracker does not hold exactly the live files")
        if files:
            biggest = self._tracker.largest()
            if biggest.size != max(f.size for f in files):
                raise InconsistentStateError(
                    f"Tracked largest file is not maximal: {biggest.name}", name=biggest.name
                )

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._index)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _resolve_parent(self, parent_name: str) -> Directory:
        parent = self._index.get(parent_name)
        if not isinstance(parent, Directory):
            raise DirectoryNotFoundError(
                f"Parent directory not found: {parent_name}", name=parent_name
            )
        return parent

    def _ensure_name_free(self, name: str) -> None:
        if name in self._index:
            raise NameAlreadyExistsError(f"Name already exists: {name}", name=name)

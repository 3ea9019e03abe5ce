from __future__ import annotations

"""
Filesystem Error Taxonomy.

Every failure raised by the node model and the manager derives from
FileSystemError, so callers can either handle each kind distinctly or
catch the whole family at an interface boundary.
"""

from typing import Any, Optional


class FileSystemError(Exception):
    """
    Base class for all simulated filesystem failures.

    Attributes:
        name: The node name the failing operation targeted, if any.
    """

    def __init__(self, message: str, *, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.name = name


# -----------------------------------------------------------------------------
# NODE VALIDATION
# -----------------------------------------------------------------------------

class InvalidNameError(FileSystemError):
    """Name is missing, empty or exceeds the length limit."""


class InvalidSizeError(FileSystemError):
    """File size is not an integer or violates the active size policy."""

    def __init__(self, message: str, *, size: Any = None, name: Optional[str] = None) -> None:
        super().__init__(message, name=name)
        self.size = size


# -----------------------------------------------------------------------------
# MANAGER OPERATIONS
# -----------------------------------------------------------------------------

class NameAlreadyExistsError(FileSystemError):
    """An add operation targets a name already present in the tree."""


class DirectoryNotFoundError(FileSystemError):
    """The parent name of an add operation does not resolve to a directory."""


class NodeNotFoundError(FileSystemError):
    """Lookup or delete targets a name absent from the index."""


class NotAFileError(FileSystemError):
    """A file-only query targets a directory."""


class CannotDeleteRootError(FileSystemError):
    """Delete targets the root directory."""


class EmptyFileSystemError(FileSystemError):
    """Largest-file query issued while no files are present."""


class InconsistentStateError(FileSystemError):
    """Tree, index and tracker disagree with each other."""

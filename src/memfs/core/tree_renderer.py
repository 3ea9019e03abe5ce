from __future__ import annotations

"""
Tree Renderer.

Converts the live node tree into text lines. Two layouts are supported:
plain depth indentation with full node details, and ASCII connectors
(├──, └──) with names and file sizes.
"""

from typing import Iterator, List

from memfs.domain.constants import (
    DEFAULT_INDENT_WIDTH,
    RENDER_STYLE_ASCII,
    RENDER_STYLE_INDENT,
    RENDER_STYLES,
)
from memfs.domain.nodes import Directory, File, FileSystemNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def iter_tree_lines(
        root: Directory,
        *,
        style: str = RENDER_STYLE_INDENT,
        indent: int = DEFAULT_INDENT_WIDTH,
) -> Iterator[str]:
    """
    Lazily render the tree below (and including) root.

    Traversal is pre-order depth-first with siblings in name order.

    Args:
        root: Directory to start from.
        style: 'indent' or 'ascii'.
        indent: Spaces per depth level for the 'indent' style.

    Yields:
        str: One rendered line per node.
    """
    if style == RENDER_STYLE_INDENT:
        for depth, node in root.walk():
            yield " " * (depth * indent) + str(node)
    elif style == RENDER_STYLE_ASCII:
        yield root.name
        yield from _iter_ascii(root, prefix="")
    else:
        raise ValueError(f"Unknown render style {style!r}; expected one of {RENDER_STYLES}")


def render_tree(
        root: Directory,
        *,
        style: str = RENDER_STYLE_INDENT,
        indent: int = DEFAULT_INDENT_WIDTH,
) -> str:
    """Render the whole tree as a single newline-joined string."""
    return "\n".join(iter_tree_lines(root, style=style, indent=indent))


class TreeView:
    """
    Restartable view over the rendered tree.

    Each iteration walks the tree as it is at that moment, so a view keeps
    reflecting later mutations.
    """

    def __init__(
            self,
            root: Directory,
            *,
            style: str = RENDER_STYLE_INDENT,
            indent: int = DEFAULT_INDENT_WIDTH,
    ) -> None:
        if style not in RENDER_STYLES:
            raise ValueError(f"Unknown render style {style!r}; expected one of {RENDER_STYLES}")
        self._root = root
        self._style = style
        self._indent = indent

    def __iter__(self) -> Iterator[str]:
        return iter_tree_lines(self._root, style=self._style, indent=self._indent)

    def __str__(self) -> str:
        return "\n".join(self)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _iter_ascii(directory: Directory, prefix: str) -> Iterator[str]:
    """Recursively yield connector-prefixed lines for a directory's children."""
    entries: List[str] = sorted(directory.children)
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        node: FileSystemNode = directory.children[entry]

        if isinstance(node, File):
            yield f"{prefix}{connector}{entry} ({node.size} bytes)"
            continue

        yield f"{prefix}{connector}{entry}/"
        if isinstance(node, Directory):
            yield from _iter_ascii(node, prefix + ("    " if is_last else "│   "))

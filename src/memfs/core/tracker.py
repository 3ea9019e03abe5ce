from __future__ import annotations

"""
Largest-File Trackers.

Two interchangeable strategies answer "which file is largest" without
rescanning the tree on the common path:

- HeapTracker: max-heap with lazy deletion. O(log F) insert, amortised
  O(1) peek, O(1) mark plus amortised O(log F) purge on removal.
- PointerTracker: a single pointer to the current maximum. O(1) insert and
  peek; removing the tracked maximum triggers an O(F) rescan.

Both resolve ties the same way: among files of equal size, the one added
most recently wins. Swapping strategies therefore never changes results.
"""

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from memfs.domain.constants import TRACKER_HEAP, TRACKER_POINTER, TRACKER_STRATEGIES
from memfs.domain.errors import EmptyFileSystemError
from memfs.domain.nodes import File

logger = logging.getLogger(__name__)

# (negated size, negated insertion sequence, file)
_HeapEntry = Tuple[int, int, File]


# -----------------------------------------------------------------------------
# CONTRACT
# -----------------------------------------------------------------------------

class LargestFileTracker(ABC):
    """
    Common contract for largest-file strategies.

    Every tracked file carries an insertion sequence number used as the
    tie-breaker between files of equal size.
    """

    strategy: str = ""

    def __init__(self) -> None:
        self._seq = itertools.count()
        self._live: Dict[File, int] = {}

    def add(self, file: File) -> None:
        """
        Start tracking a file.

        Raises:
            ValueError: If the file is already tracked.
        """
        if file in self._live:
            raise ValueError(f"File '{file.name}' is already tracked")
        seq = next(self._seq)
        self._live[file] = seq
        self._on_add(file, seq)

    def discard(self, file: File) -> None:
        """Stop tracking a file. Untracked files are ignored."""
        if self._live.pop(file, None) is None:
            return
        self._on_discard(file)

    def discard_many(self, files: Iterable[File]) -> None:
        """Stop tracking several files as one batch."""
        for file in files:
            self.discard(file)

    def largest(self) -> File:
        """
        Return the current largest file.

        Raises:
            EmptyFileSystemError: If no file is tracked.
        """
        found = self._peek()
        if found is None:
            raise EmptyFileSystemError(
                "No files found in the file system, can't get the biggest file."
            )
        return found

    def clear(self) -> None:
        self._live.clear()
        self._on_clear()

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, file: object) -> bool:
        return file in self._live

    @staticmethod
    def _rank(file: File, seq: int) -> Tuple[int, int]:
        return file.size, seq

    @abstractmethod
    def _on_add(self, file: File, seq: int) -> None: ...

    @abstractmethod
    def _on_discard(self, file: File) -> None: ...

    @abstractmethod
    def _peek(self) -> Optional[File]: ...

    @abstractmethod
    def _on_clear(self) -> None: ...


# -----------------------------------------------------------------------------
# PRIORITY-QUEUE STRATEGY
# -----------------------------------------------------------------------------

class HeapTracker(LargestFileTracker):
    """
    Max-heap over (size, insertion sequence) with lazy deletion.

    Discarded files stay in the heap as stale entries until they surface at
    the top or the heap is compacted, which happens once stale entries
    outnumber live ones.
    """

    strategy = TRACKER_HEAP

    def __init__(self) -> None:
        super().__init__()
        self._heap: List[_HeapEntry] = []
        self._stale = 0

    def _on_add(self, file: File, seq: int) -> None:
        heapq.heappush(self._heap, (-file.size, -seq, file))

    def _on_discard(self, file: File) -> None:
        self._stale += 1
        self._purge_top()
        if self._stale > len(self._live):
            self._compact()

    def _peek(self) -> Optional[File]:
        self._purge_top()
        if not self._heap:
            return None
        return self._heap[0][2]

    def _on_clear(self) -> None:
        self._heap.clear()
        self._stale = 0

    def _is_live(self, entry: _HeapEntry) -> bool:
        return self._live.get(entry[2]) == -entry[1]

    def _purge_top(self) -> None:
        while self._heap and not self._is_live(self._heap[0]):
            heapq.heappop(self._heap)
            self._stale -= 1

    def _compact(self) -> None:
        before = len(self._heap)
        self._heap = [entry for entry in self._heap if self._is_live(entry)]
        heapq.heapify(self._heap)
        self._stale = 0
        logger.debug(f"Compacted largest-file heap: {before} -> {len(self._heap)} entries")


# -----------------------------------------------------------------------------
# INCREMENTAL-POINTER STRATEGY
# -----------------------------------------------------------------------------

class PointerTracker(LargestFileTracker):
    """
    Single pointer to the largest file, rescanned only when it is removed.
    """

    strategy = TRACKER_POINTER

    def __init__(self) -> None:
        super().__init__()
        self._top: Optional[File] = None

    def _on_add(self, file: File, seq: int) -> None:
        # seq always grows, so >= hands ties to the newest file
        if self._top is None or file.size >= self._top.size:
            self._top = file

    def _on_discard(self, file: File) -> None:
        if file is self._top:
            self._rescan()

    def discard_many(self, files: Iterable[File]) -> None:
        # Drop the whole batch first so a removed maximum costs one rescan
        top_removed = False
        for file in files:
            if self._live.pop(file, None) is not None and file is self._top:
                top_removed = True
        if top_removed:
            self._rescan()

    def _peek(self) -> Optional[File]:
        return self._top

    def _on_clear(self) -> None:
        self._top = None

    def _rescan(self) -> None:
        if not self._live:
            self._on_clear()
            return
        file, _ = max(self._live.items(), key=lambda item: self._rank(*item))
        self._top = file
        logger.debug(f"Largest file recomputed over {len(self._live)} files: {file.name}")


# -----------------------------------------------------------------------------
# FACTORY
# -----------------------------------------------------------------------------

_STRATEGIES = {
    TRACKER_HEAP: HeapTracker,
    TRACKER_POINTER: PointerTracker,
}


def create_tracker(strategy: str = TRACKER_HEAP) -> LargestFileTracker:
    """
    Instantiate the tracker registered under the given strategy name.

    Raises:
        ValueError: If the strategy is unknown.
    """
    try:
        return _STRATEGIES[strategy]()
    except KeyError:
        raise ValueError(
            f"Unknown tracker strategy {strategy!r}; expected one of {TRACKER_STRATEGIES}"
        ) from None

from __future__ import annotations

"""
Unit tests for the Largest-File Trackers.

Both strategies must answer identically, including the newest-wins
tie-break, across arbitrary add/discard sequences.
"""

import random

import pytest

from memfs.core.tracker import HeapTracker, PointerTracker, create_tracker
from memfs.domain.errors import EmptyFileSystemError
from memfs.domain.nodes import File


@pytest.fixture(params=["heap", "pointer"])
def tracker(request):
    return create_tracker(request.param)


def test_factory_returns_requested_strategy():
    assert isinstance(create_tracker("heap"), HeapTracker)
    assert isinstance(create_tracker("pointer"), PointerTracker)
    with pytest.raises(ValueError):
        create_tracker("splay")


def test_empty_tracker_raises(tracker):
    with pytest.raises(EmptyFileSystemError):
        tracker.largest()


def test_largest_follows_adds_and_discards(tracker):
    small, big, mid = File("small", 100), File("big", 6400), File("mid", 1000)
    for f in (small, big, mid):
        tracker.add(f)

    assert tracker.largest() is big
    assert len(tracker) == 3

    tracker.discard(big)
    assert tracker.largest() is mid
    assert big not in tracker

    tracker.discard(mid)
    tracker.discard(small)
    with pytest.raises(EmptyFileSystemError):
        tracker.largest()


def test_newest_file_wins_ties(tracker):
    first, second = File("first", 3000), File("second", 3000)
    tracker.add(first)
    tracker.add(second)
    assert tracker.largest() is second

    tracker.discard(second)
    assert tracker.largest() is first


def test_tie_after_rescan_prefers_newest(tracker):
    a, b, top = File("a", 50), File("b", 50), File("top", 99)
    tracker.add(a)
    tracker.add(b)
    tracker.add(top)

    tracker.discard(top)
    assert tracker.largest() is b


def test_discard_of_untracked_file_is_a_no_op(tracker):
    tracked = File("tracked", 5)
    tracker.add(tracked)
    tracker.discard(File("stranger", 500))
    assert tracker.largest() is tracked
    assert len(tracker) == 1


def test_double_add_is_rejected(tracker):
    f = File("f", 1)
    tracker.add(f)
    with pytest.raises(ValueError):
        tracker.add(f)


def test_discard_many_and_clear(tracker):
    files = [File(f"f{i}", i + 1) for i in range(10)]
    for f in files:
        tracker.add(f)

    tracker.discard_many(files[5:])
    assert tracker.largest() is files[4]
    assert len(tracker) == 5

    tracker.clear()
    assert len(tracker) == 0
    with pytest.raises(EmptyFileSystemError):
        tracker.largest()


def test_heap_compacts_stale_entries():
    tracker = HeapTracker()
    files = [File(f"f{i}", 1000 - i) for i in range(20)]
    for f in files:
        tracker.add(f)

    # Discard from the bottom so nothing surfaces at the top
    for f in files[:0:-1]:
        tracker.discard(f)

    assert tracker.largest() is files[0]
    assert len(tracker._heap) <= 2 * len(tracker) + 1


def test_strategies_agree_on_random_sequences():
    rng = random.Random(1234)
    heap, pointer = HeapTracker(), PointerTracker()
    live = []

    for step in range(500):
        if live and rng.random() < 0.4:
            victim = live.pop(rng.randrange(len(live)))
            heap.discard(victim)
            pointer.discard(victim)
        else:
            f = File(f"f{step}", rng.randint(1, 20))
            live.append(f)
            heap.add(f)
            pointer.add(f)

        if live:
            expected = max(f.size for f in live)
            assert heap.largest() is pointer.largest()
            assert heap.largest().size == expected
        else:
            with pytest.raises(EmptyFileSystemError):
                heap.largest()

from __future__ import annotations

"""
Randomized invariant tests for the Filesystem Manager.

Drives long random sequences of adds and deletes (valid and invalid) and
checks, after every step, that:
- the index holds exactly the names reachable from root,
- the largest file reported is maximal by independent scan,
- failing calls leave the observable state unchanged.
"""

import random

import pytest

from memfs.core.manager import FileSystemManager
from memfs.domain.errors import EmptyFileSystemError, FileSystemError, NodeNotFoundError
from memfs.domain.nodes import Directory, File


def reachable_names(fs: FileSystemManager):
    return {node.name for _, node in fs.root.walk()}


def scan_max_size(fs: FileSystemManager):
    sizes = [node.size for _, node in fs.root.walk() if isinstance(node, File)]
    return max(sizes) if sizes else None


def observable(fs: FileSystemManager):
    try:
        biggest = fs.get_biggest_file()
    except EmptyFileSystemError:
        biggest = None
    return len(fs), list(fs.show_filesystem(style="ascii")), biggest


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_random_operations_preserve_invariants(tracker_strategy, seed):
    rng = random.Random(seed)
    fs = FileSystemManager({"tracker_strategy": tracker_strategy})
    pool = [f"n{i}" for i in range(40)]

    for _ in range(400):
        dirs = [n.name for _, n in fs.root.walk() if isinstance(n, Directory)]
        op = rng.random()
        before = observable(fs)

        try:
            if op < 0.3:
                fs.add_directory(rng.choice(dirs + ["missing"]), rng.choice(pool))
            elif op < 0.7:
                fs.add_file(rng.choice(dirs + ["missing"]), rng.choice(pool), rng.randint(-1, 50))
            else:
                fs.delete(rng.choice(pool + ["root"]))
        except FileSystemError:
            assert observable(fs) == before

        names = reachable_names(fs)
        assert {n for n in pool + ["root"] if n in fs} == names
        assert len(fs) == len(names)

        expected = scan_max_size(fs)
        if expected is None:
            with pytest.raises(EmptyFileSystemError):
                fs.get_biggest_file()
        else:
            assert fs.get_file_size(fs.get_biggest_file()) == expected

        fs.check_consistency()


def test_deleting_a_directory_removes_every_descendant(fs):
    fs.add_directory("root", "top")
    parent = "top"
    descendants = []
    for depth in range(10):
        d = f"d{depth}"
        fs.add_directory(parent, d)
        fs.add_file(d, f"f{depth}", depth + 1)
        descendants += [d, f"f{depth}"]
        parent = d

    fs.delete("top")

    for name in descendants:
        with pytest.raises(NodeNotFoundError):
            fs.get_node(name)
    assert len(fs) == 1
    assert fs.file_count == 0

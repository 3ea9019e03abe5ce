from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared filesystem fixtures used across unit and integration tests.
"""

import os
import sys

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from memfs.core.manager import FileSystemManager  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(params=["heap", "pointer"])
def tracker_strategy(request) -> str:
    """Run the dependent test once per largest-file strategy."""
    return request.param


@pytest.fixture
def fs(tracker_strategy: str) -> FileSystemManager:
    """Return an empty filesystem using the parametrized tracker."""
    return FileSystemManager({"tracker_strategy": tracker_strategy})


@pytest.fixture
def sample_fs(fs: FileSystemManager) -> FileSystemManager:
    """
    Return a filesystem populated with the reference scenario.

    Structure:
    root
      Documents
        Work
          project.docx (800)
        budget.xlsx (1200)
        resume.docx (500)
      Pictures
        profile_pic.jpg (3000)
        vacation.jpg (6400)
    """
    fs.add_directory("root", "Documents")
    fs.add_directory("root", "Pictures")
    fs.add_directory("Documents", "Work")
    fs.add_file("Documents", "resume.docx", 500)
    fs.add_file("Documents", "budget.xlsx", 1200)
    fs.add_file("Pictures", "vacation.jpg", 6400)
    fs.add_file("Pictures", "profile_pic.jpg", 3000)
    fs.add_file("Work", "project.docx", 800)
    return fs

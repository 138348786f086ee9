"""Shared pytest configuration and fixtures for tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from protask.core.exceptions import PersistenceError  # noqa: E402


class MemoryPersistence:
    """In-memory stand-in for the repository module's load/save pair."""

    def __init__(self, tasks=None):
        self.saved = list(tasks or [])
        self.save_count = 0
        self.fail = False

    def load_tasks(self):
        return [t.copy() for t in self.saved]

    def save_tasks(self, tasks):
        if self.fail:
            raise PersistenceError("disk full")
        self.saved = [t.copy() for t in tasks]
        self.save_count += 1


@pytest.fixture
def memory():
    return MemoryPersistence()

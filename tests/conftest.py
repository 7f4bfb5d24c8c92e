# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from picker import TaskPicker
from storage import FileStore, MemoryStore, TaskStore


@pytest.fixture()
def task_dir(tmp_path: Path) -> Path:
    return tmp_path / "tasks"


@pytest.fixture(params=["memory", "file"])
def store(request: pytest.FixtureRequest, task_dir: Path) -> TaskStore:
    """Each backend in turn; behaviour shared by both is tested once."""
    if request.param == "memory":
        return MemoryStore()
    return FileStore(task_dir)


@pytest.fixture()
def picker(store: TaskStore) -> TaskPicker:
    return TaskPicker(store)

"""Shared fixtures for monday tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from monday.storage import Storage
from monday.task_list import TaskList
from monday.tasks import Deadline, Event, ToDo


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory for the task file (not created up front)."""
    return tmp_path / "data"


@pytest.fixture
def storage(data_dir: Path) -> Storage:
    """Storage pointed at a temporary data directory."""
    return Storage(data_dir, "monday.txt")


@pytest.fixture
def sample_tasks() -> list:
    """One task of each kind."""
    return [
        ToDo("read book"),
        Deadline("return book", datetime(2019, 12, 2, 18, 0)),
        Event("project meeting", datetime(2019, 12, 25, 14, 0), datetime(2019, 12, 25, 18, 0)),
    ]


@pytest.fixture
def task_list(sample_tasks: list) -> TaskList:
    """A task list holding the sample tasks."""
    return TaskList(sample_tasks)


@pytest.fixture
def sample_task_file(storage: Storage) -> Path:
    """Write a valid task file and return its path."""
    storage.data_dir.mkdir(parents=True, exist_ok=True)
    storage.path.write_text(
        "T | 0 | read book\n"
        "D | 1 | return book | by: 2019-12-02 18:00\n"
        "E | 0 | project meeting | from: 2019-12-25 14:00 | to: 2019-12-25 18:00\n"
    )
    return storage.path

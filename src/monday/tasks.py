"""Task variants tracked by monday.

A task is one of three frozen dataclasses. Code that needs to treat the
variants differently (display, encoding, date filtering) checks the
variant explicitly instead of relying on overridden methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from monday.datetimes import format_display


class TaskType(Enum):
    """Single-letter tag for each task variant.

    The value is what appears in the first column of the task file.
    """

    TODO = "T"
    """A plain task with only a description."""

    DEADLINE = "D"
    """A task due by a given date and time."""

    EVENT = "E"
    """A task spanning a start and end date and time."""


def _require_description(description: str) -> None:
    if not description.strip():
        raise ValueError("Task description must not be empty")


@dataclass(frozen=True)
class ToDo:
    """A task with a description only."""

    description: str
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)

    @property
    def type(self) -> TaskType:
        return TaskType.TODO


@dataclass(frozen=True)
class Deadline:
    """A task that must be done by a given date and time."""

    description: str
    by: datetime
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)

    @property
    def type(self) -> TaskType:
        return TaskType.DEADLINE


@dataclass(frozen=True)
class Event:
    """A task spanning a time range. The end is not checked against the start."""

    description: str
    start: datetime
    end: datetime
    done: bool = False

    def __post_init__(self) -> None:
        _require_description(self.description)

    @property
    def type(self) -> TaskType:
        return TaskType.EVENT


Task = Union[ToDo, Deadline, Event]


def describe(task: Task) -> str:
    """Render a task the way it appears in responses.

    Examples:
        ``[T][ ] read book``
        ``[D][X] return book (by: Dec 02 2019 1800)``
    """
    status = "X" if task.done else " "
    text = f"[{task.type.value}][{status}] {task.description}"

    if isinstance(task, Deadline):
        text += f" (by: {format_display(task.by)})"
    elif isinstance(task, Event):
        text += f" (from: {format_display(task.start)} to: {format_display(task.end)})"

    return text

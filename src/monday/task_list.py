"""The ordered, bounded collection of tasks for a session."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from datetime import date

from monday.errors import MondayError
from monday.tasks import Deadline, Event, Task

MAX_TASKS = 100


class CapacityExceeded(MondayError):
    """Raised when adding to a full task list."""

    def __init__(self, limit: int = MAX_TASKS) -> None:
        self.limit = limit
        super().__init__(
            f"Fine. I can't remember more than {limit} things. Forget something first."
        )


class InvalidTaskNumber(MondayError):
    """Raised when a 1-based task number does not address a task."""

    def __init__(self, number: int, size: int, message: str) -> None:
        self.number = number
        self.size = size
        super().__init__(message)


class EmptyTaskList(InvalidTaskNumber):
    """The list has no tasks at all, so no number is valid."""

    def __init__(self, number: int) -> None:
        super().__init__(number, 0, "Skeptical. You haven't told me to do anything yet.")


class TaskNumberOutOfRange(InvalidTaskNumber):
    """The list has tasks, but not at this number."""

    def __init__(self, number: int, size: int) -> None:
        super().__init__(
            number, size, f"Ugh, that task doesn't exist. Pick between 1 and {size}."
        )


class TaskList:
    """Tasks in insertion order, addressed by 1-based position.

    Positions are not stable: deleting task 2 renumbers every later task.
    ``limit`` only caps :meth:`add`; a list built from more tasks keeps them
    all and stays full until enough are deleted.
    Tasks are immutable, so callers can hold on to anything this class
    returns without being able to change the list behind its back.
    """

    def __init__(self, tasks: Iterable[Task] = (), limit: int = MAX_TASKS) -> None:
        self._tasks: list[Task] = list(tasks)
        self.limit = limit

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    @property
    def tasks(self) -> list[Task]:
        """A snapshot of all tasks in order."""
        return list(self._tasks)

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    @property
    def is_full(self) -> bool:
        return len(self._tasks) >= self.limit

    def add(self, task: Task) -> None:
        """Append a task.

        Raises:
            CapacityExceeded: If the list already holds ``limit`` tasks.
        """
        if self.is_full:
            raise CapacityExceeded(self.limit)
        self._tasks.append(task)

    def get(self, number: int) -> Task:
        """Return the task at 1-based position ``number``."""
        return self._tasks[self._index(number)]

    def delete(self, number: int) -> Task:
        """Remove and return the task at ``number``."""
        return self._tasks.pop(self._index(number))

    def mark_done(self, number: int) -> Task:
        """Mark the task at ``number`` as done and return the updated task."""
        return self._set_done(number, True)

    def mark_not_done(self, number: int) -> Task:
        """Mark the task at ``number`` as not done and return the updated task."""
        return self._set_done(number, False)

    def filter_by_date(self, day: date) -> list[Task]:
        """Deadlines due on ``day`` and events starting on ``day``.

        An event's end date is never matched. To-dos are never included.
        """
        matches: list[Task] = []
        for task in self._tasks:
            if isinstance(task, Deadline) and task.by.date() == day:
                matches.append(task)
            elif isinstance(task, Event) and task.start.date() == day:
                matches.append(task)
        return matches

    def find_by_keyword(self, keyword: str) -> list[Task]:
        """Tasks whose description contains ``keyword``, ignoring case."""
        needle = keyword.casefold()
        return [t for t in self._tasks if needle in t.description.casefold()]

    def _set_done(self, number: int, done: bool) -> Task:
        index = self._index(number)
        updated = dataclasses.replace(self._tasks[index], done=done)
        self._tasks[index] = updated
        return updated

    def _index(self, number: int) -> int:
        if not self._tasks:
            raise EmptyTaskList(number)
        if not 1 <= number <= len(self._tasks):
            raise TaskNumberOutOfRange(number, len(self._tasks))
        return number - 1

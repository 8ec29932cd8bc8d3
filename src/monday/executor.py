"""Apply parsed commands to a task list.

``execute`` is the only entry point. It never raises for user mistakes:
a bad task number or a full list comes back as a ``CommandOutcome`` with
``error`` set and the list left untouched.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from monday.commands import (
    AddCommand,
    AddDeadlineCommand,
    AddEventCommand,
    AddTodoCommand,
    CheerCommand,
    Command,
    DeleteCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
    ViewCommand,
)
from monday.datetimes import format_display_date
from monday.task_list import CapacityExceeded, EmptyTaskList, InvalidTaskNumber, TaskList
from monday.tasks import Deadline, Event, Task, ToDo, describe

if TYPE_CHECKING:
    from monday.parser import ParseErrorKind

logger = logging.getLogger(__name__)

NOTHING_YET = "Skeptical. You haven't told me to do anything yet."
FAREWELL = "Finally, you're leaving. Don't come back too soon."
DEFAULT_QUOTE = (
    "Congratulations on doing the bare minimum. That's still more than most people manage."
)

HELP_TEXT = """\
Ugh. Fine. Here's what I understand (not that you'll listen):
  todo <description>           - Add a todo task
  deadline <desc> /by <time>   - Add a deadline task
  event <desc> /from <start> /to <end> - Add an event
  list                         - Show all tasks
  find <keyword>               - Find tasks by keyword
  view <date>                  - Show tasks for a specific date (yyyy-MM-dd)
  mark <number>                - Mark task as done
  unmark <number>              - Mark task as not done
  delete <number>              - Delete a task (no going back)
  cheer                        - Get some motivation (don't expect much)
  help                         - Show this help (you're welcome)
  bye / exit                   - Get rid of me"""


class ExecutionErrorKind(Enum):
    """Why a well-formed command could not be applied."""

    EMPTY_LIST = "empty_list"
    OUT_OF_RANGE = "out_of_range"
    CAPACITY_EXCEEDED = "capacity_exceeded"


@dataclass(frozen=True)
class CommandOutcome:
    """What happened when a command ran.

    ``should_persist`` asks the caller to save the task list;
    ``should_exit`` ends the session.
    """

    message: str
    should_persist: bool = False
    should_exit: bool = False
    error: ExecutionErrorKind | ParseErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def execute(
    command: Command,
    tasks: TaskList,
    *,
    corrupted_on_load: bool = False,
    quotes_path: Path | None = None,
    rng: random.Random | None = None,
) -> CommandOutcome:
    """Apply ``command`` to ``tasks``.

    Args:
        command: A command produced by :func:`monday.parser.parse_command`.
        tasks: The session's task list, mutated in place.
        corrupted_on_load: Whether loading the task file skipped corrupted
            lines. An exit then still asks for a save so the file is rewritten
            without them.
        quotes_path: Optional file of cheer quotes, one per line.
        rng: Random source for picking a cheer quote.
    """
    try:
        if isinstance(command, ExitCommand):
            return CommandOutcome(FAREWELL, should_persist=corrupted_on_load, should_exit=True)
        if isinstance(command, ListCommand):
            return _list(tasks)
        if isinstance(command, HelpCommand):
            return CommandOutcome(HELP_TEXT)
        if isinstance(command, CheerCommand):
            return CommandOutcome(_pick_quote(quotes_path, rng or random.Random()))
        if isinstance(command, MarkCommand):
            return _mark(command, tasks)
        if isinstance(command, DeleteCommand):
            return _delete(command, tasks)
        if isinstance(command, (AddTodoCommand, AddDeadlineCommand, AddEventCommand)):
            return _add(command, tasks)
        if isinstance(command, ViewCommand):
            return _view(command, tasks)
        if isinstance(command, FindCommand):
            return _find(command, tasks)
    except InvalidTaskNumber as e:
        kind = (
            ExecutionErrorKind.EMPTY_LIST
            if isinstance(e, EmptyTaskList)
            else ExecutionErrorKind.OUT_OF_RANGE
        )
        return CommandOutcome(str(e), error=kind)
    except CapacityExceeded as e:
        return CommandOutcome(str(e), error=ExecutionErrorKind.CAPACITY_EXCEEDED)

    raise TypeError(f"Unsupported command: {command!r}")


def _add(command: AddCommand, tasks: TaskList) -> CommandOutcome:
    if tasks.is_full:
        raise CapacityExceeded(tasks.limit)

    task: Task
    if isinstance(command, AddTodoCommand):
        task = ToDo(command.description)
    elif isinstance(command, AddDeadlineCommand):
        task = Deadline(command.description, command.by)
    else:
        task = Event(command.description, command.start, command.end)

    tasks.add(task)
    logger.debug("Added task %d: %r", len(tasks), task)
    message = f"Fine. I've added this todo:\n  {describe(task)}\n{_count_line(len(tasks))}"
    return CommandOutcome(message, should_persist=True)


def _mark(command: MarkCommand, tasks: TaskList) -> CommandOutcome:
    if command.done:
        task = tasks.mark_done(command.number)
        header = "Fine. I've marked this task as done:"
    else:
        task = tasks.mark_not_done(command.number)
        header = "Ugh, I've marked this task as not done:"
    return CommandOutcome(f"{header}\n  {describe(task)}", should_persist=True)


def _delete(command: DeleteCommand, tasks: TaskList) -> CommandOutcome:
    task = tasks.delete(command.number)
    logger.debug("Deleted task %d: %r", command.number, task)
    message = f"Noted. I've removed this task:\n  {describe(task)}\n{_count_line(len(tasks))}"
    return CommandOutcome(message, should_persist=True)


def _list(tasks: TaskList) -> CommandOutcome:
    if tasks.is_empty:
        return CommandOutcome(NOTHING_YET)
    return CommandOutcome(_numbered(tasks.tasks))


def _view(command: ViewCommand, tasks: TaskList) -> CommandOutcome:
    day = format_display_date(command.day)
    matches = tasks.filter_by_date(command.day)
    if not matches:
        return CommandOutcome(f"Skeptical. Nothing scheduled for {day}.")
    return CommandOutcome(f"Ugh. Here's what you have on {day}:\n{_numbered(matches)}")


def _find(command: FindCommand, tasks: TaskList) -> CommandOutcome:
    matches = tasks.find_by_keyword(command.keyword)
    if not matches:
        return CommandOutcome(f'Fine. No tasks match "{command.keyword}". Shocking, I know.')
    return CommandOutcome(f"Here are the matching tasks in your list:\n{_numbered(matches)}")


def _numbered(tasks: Sequence[Task]) -> str:
    return "\n".join(f"{i}. {describe(task)}" for i, task in enumerate(tasks, start=1))


def _count_line(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


def load_quotes(path: Path | None) -> list[str]:
    """Read cheer quotes from ``path``, one per line, ignoring blank lines.

    Falls back to a single built-in quote when the file is missing,
    unreadable or empty.
    """
    quotes: list[str] = []
    if path is not None and path.exists():
        try:
            quotes = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Couldn't read quotes from %s: %s", path, e)
        quotes = [q for q in quotes if q]
    return quotes or [DEFAULT_QUOTE]


def _pick_quote(path: Path | None, rng: random.Random) -> str:
    return rng.choice(load_quotes(path))

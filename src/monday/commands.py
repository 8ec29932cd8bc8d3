"""The command vocabulary and the parsed command values.

Every command the parser can produce is a small frozen dataclass holding
already-validated data. ``COMMANDS`` maps each accepted command word
(including aliases) to its ``CommandType``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Union


class CommandType(Enum):
    """Known commands. The value is the canonical command word."""

    EXIT = "bye"
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"
    DELETE = "delete"
    VIEW = "view"
    FIND = "find"
    HELP = "help"
    CHEER = "cheer"

    @property
    def word(self) -> str:
        return self.value


ALIASES: dict[str, CommandType] = {
    "exit": CommandType.EXIT,
}

COMMANDS: dict[str, CommandType] = {
    **{command.word: command for command in CommandType},
    **ALIASES,
}


def lookup(word: str) -> CommandType | None:
    """Resolve a command word (case-insensitive) to its type."""
    return COMMANDS.get(word.lower())


@dataclass(frozen=True)
class ExitCommand:
    type = CommandType.EXIT


@dataclass(frozen=True)
class ListCommand:
    type = CommandType.LIST


@dataclass(frozen=True)
class HelpCommand:
    type = CommandType.HELP


@dataclass(frozen=True)
class CheerCommand:
    type = CommandType.CHEER


@dataclass(frozen=True)
class MarkCommand:
    """Mark (``done=True``) or unmark (``done=False``) a task."""

    number: int
    done: bool

    @property
    def type(self) -> CommandType:
        return CommandType.MARK if self.done else CommandType.UNMARK


@dataclass(frozen=True)
class DeleteCommand:
    type = CommandType.DELETE

    number: int


@dataclass(frozen=True)
class AddTodoCommand:
    type = CommandType.TODO

    description: str


@dataclass(frozen=True)
class AddDeadlineCommand:
    type = CommandType.DEADLINE

    description: str
    by: datetime


@dataclass(frozen=True)
class AddEventCommand:
    type = CommandType.EVENT

    description: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ViewCommand:
    type = CommandType.VIEW

    day: date


@dataclass(frozen=True)
class FindCommand:
    type = CommandType.FIND

    keyword: str


Command = Union[
    ExitCommand,
    ListCommand,
    HelpCommand,
    CheerCommand,
    MarkCommand,
    DeleteCommand,
    AddTodoCommand,
    AddDeadlineCommand,
    AddEventCommand,
    ViewCommand,
    FindCommand,
]

AddCommand = Union[AddTodoCommand, AddDeadlineCommand, AddEventCommand]

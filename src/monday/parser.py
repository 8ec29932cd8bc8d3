"""Turn a raw line of user input into a command.

``parse_command`` never raises for bad input: it returns either a command
from :mod:`monday.commands` or a :class:`ParseFailure` describing what the
user got wrong, with an example of what to type instead.

Markers (``/by``, ``/from``, ``/to``) are split on their first occurrence
and are not escaped, so a description cannot itself contain a marker.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from monday.commands import (
    AddDeadlineCommand,
    AddEventCommand,
    AddTodoCommand,
    CheerCommand,
    Command,
    CommandType,
    DeleteCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
    ViewCommand,
    lookup,
)
from monday.datetimes import DATE_HINT, DATETIME_HINT, parse_date, parse_datetime
from monday.errors import InvalidDateTime

BY = "/by"
FROM = "/from"
TO = "/to"

DEADLINE_EXAMPLE = "Try 'deadline return book /by 2019-12-02 1800'."
EVENT_EXAMPLE = "Try 'event project meeting /from 2019-12-25 1400 /to 2019-12-25 1800'."

_INTEGER = re.compile(r"[+-]?\d+")


class ParseErrorKind(Enum):
    """Why a line could not be turned into a command."""

    EMPTY_INPUT = "empty_input"
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_NUMBER = "missing_number"
    NOT_A_NUMBER = "not_a_number"
    MISSING_DESCRIPTION = "missing_description"
    MISSING_WHEN = "missing_when"
    MISSING_FROM_TO = "missing_from_to"
    MISSING_FROM = "missing_from"
    MISSING_TO = "missing_to"
    MISSING_DATE = "missing_date"
    MISSING_KEYWORD = "missing_keyword"
    UNPARSABLE_DATETIME = "unparsable_datetime"
    INVALID_DESCRIPTION = "invalid_description"


@dataclass(frozen=True)
class ParseFailure:
    """A line that could not be parsed, with a message for the user."""

    kind: ParseErrorKind
    message: str


class _Fail(Exception):
    """Internal short-circuit; always converted to a ParseFailure."""

    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.failure = ParseFailure(kind, message)


def parse_command(line: str) -> Command | ParseFailure:
    """Parse one line of user input."""
    text = line.strip()
    if not text:
        return ParseFailure(
            ParseErrorKind.EMPTY_INPUT, "Ugh, you didn't actually say anything. Try again."
        )

    parts = text.split(maxsplit=1)
    word = parts[0].lower()
    rest = parts[1].strip() if len(parts) > 1 else ""

    command_type = lookup(word)
    if command_type is None:
        return ParseFailure(
            ParseErrorKind.UNKNOWN_COMMAND,
            f"Ugh, I don't understand '{word}'. "
            "Type 'help' if you're confused. It's probably hopeless though.",
        )

    try:
        return _PARSERS[command_type](rest)
    except _Fail as e:
        return e.failure


def _task_number(rest: str, word: str) -> int:
    if not rest:
        raise _Fail(
            ParseErrorKind.MISSING_NUMBER, f"Ugh, {word} which task? Try '{word} 1'."
        )
    if not _INTEGER.fullmatch(rest):
        raise _Fail(
            ParseErrorKind.NOT_A_NUMBER,
            f"Ugh, that's not a valid number. Try '{word} 1' instead.",
        )
    return int(rest)


def _parse_mark(rest: str) -> Command:
    return MarkCommand(_task_number(rest, CommandType.MARK.word), done=True)


def _parse_unmark(rest: str) -> Command:
    return MarkCommand(_task_number(rest, CommandType.UNMARK.word), done=False)


def _parse_delete(rest: str) -> Command:
    return DeleteCommand(_task_number(rest, CommandType.DELETE.word))


def _parse_todo(rest: str) -> Command:
    if not rest:
        raise _Fail(
            ParseErrorKind.MISSING_DESCRIPTION,
            "Ugh, a todo needs a description. Try 'todo borrow book'.",
        )
    return AddTodoCommand(_description(rest))


def _parse_deadline(rest: str) -> Command:
    if BY not in rest:
        raise _Fail(
            ParseErrorKind.MISSING_WHEN,
            f"Ugh, deadlines need a '{BY}' time. {DEADLINE_EXAMPLE}",
        )

    description, _, when = (part.strip() for part in rest.partition(BY))
    if not description:
        raise _Fail(
            ParseErrorKind.MISSING_DESCRIPTION,
            f"Ugh, what's the deadline for? {DEADLINE_EXAMPLE}",
        )
    if not when:
        raise _Fail(ParseErrorKind.MISSING_WHEN, f"Ugh, when is it due? {DEADLINE_EXAMPLE}")

    return AddDeadlineCommand(_description(description), _datetime(when))


def _parse_event(rest: str) -> Command:
    if FROM not in rest or TO not in rest:
        raise _Fail(
            ParseErrorKind.MISSING_FROM_TO,
            f"Ugh, events need '{FROM}' and '{TO}' times. {EVENT_EXAMPLE}",
        )

    description, _, span = rest.partition(FROM)
    start, _, end = span.partition(TO)
    description, start, end = description.strip(), start.strip(), end.strip()

    if not description:
        raise _Fail(ParseErrorKind.MISSING_DESCRIPTION, f"Ugh, what's the event? {EVENT_EXAMPLE}")
    if not start:
        raise _Fail(ParseErrorKind.MISSING_FROM, f"Ugh, when does it start? {EVENT_EXAMPLE}")
    if not end:
        raise _Fail(ParseErrorKind.MISSING_TO, f"Ugh, when does it end? {EVENT_EXAMPLE}")

    return AddEventCommand(_description(description), _datetime(start), _datetime(end))


def _description(text: str) -> str:
    # The task file separates fields with '|'.
    if "|" in text:
        raise _Fail(
            ParseErrorKind.INVALID_DESCRIPTION,
            "Ugh, no '|' in descriptions. I need those to keep your tasks apart.",
        )
    return text


def _parse_view(rest: str) -> Command:
    if not rest:
        raise _Fail(
            ParseErrorKind.MISSING_DATE,
            "Ugh, what date do you want to view? Try 'view 2019-12-25'.",
        )
    try:
        return ViewCommand(parse_date(rest))
    except InvalidDateTime:
        raise _Fail(
            ParseErrorKind.UNPARSABLE_DATETIME, f"Ugh, I can't understand that date. {DATE_HINT}"
        ) from None


def _parse_find(rest: str) -> Command:
    if not rest:
        raise _Fail(ParseErrorKind.MISSING_KEYWORD, "Ugh, find what? Try 'find book'.")
    return FindCommand(rest)


def _datetime(text: str) -> datetime:
    try:
        return parse_datetime(text)
    except InvalidDateTime:
        raise _Fail(
            ParseErrorKind.UNPARSABLE_DATETIME,
            f"Ugh, I can't understand that date. {DATETIME_HINT}",
        ) from None


# Commands without arguments ignore anything typed after the command word.
_PARSERS: dict[CommandType, Callable[[str], Command]] = {
    CommandType.EXIT: lambda rest: ExitCommand(),
    CommandType.LIST: lambda rest: ListCommand(),
    CommandType.HELP: lambda rest: HelpCommand(),
    CommandType.CHEER: lambda rest: CheerCommand(),
    CommandType.MARK: _parse_mark,
    CommandType.UNMARK: _parse_unmark,
    CommandType.DELETE: _parse_delete,
    CommandType.TODO: _parse_todo,
    CommandType.DEADLINE: _parse_deadline,
    CommandType.EVENT: _parse_event,
    CommandType.VIEW: _parse_view,
    CommandType.FIND: _parse_find,
}

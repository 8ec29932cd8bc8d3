"""Task file storage.

Tasks are stored one per line, pipe-delimited::

    T | 0 | read book
    D | 1 | return book | by: 2019-12-02 18:00
    E | 0 | project meeting | from: 2019-12-25 14:00 | to: 2019-12-25 18:00

Loading never fails because of a bad line. Lines that can't be decoded,
including lines that aren't valid UTF-8, are counted, logged, and copied
byte for byte into a recovery file next to the task file
(``monday.txt.corrupted`` by default) so nothing is lost when the next save
rewrites the task file without them.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from monday.datetimes import format_storage, parse_storage
from monday.errors import InvalidDateTime, StorageUnavailable
from monday.tasks import Deadline, Event, Task, TaskType, ToDo

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "monday.txt"
CORRUPTED_SUFFIX = ".corrupted"

_DELIMITER = re.compile(r"\s*\|\s*")

_FIELD_COUNTS = {TaskType.TODO: 3, TaskType.DEADLINE: 4, TaskType.EVENT: 5}


class CorruptedLine(ValueError):
    """A task file line that can't be decoded."""


@dataclass
class LoadResult:
    """Tasks decoded from the task file, plus how many lines were skipped."""

    tasks: list[Task] = field(default_factory=list)
    corrupted_count: int = 0

    @property
    def has_corruption(self) -> bool:
        return self.corrupted_count > 0


def encode_task(task: Task) -> str:
    """Encode a task as one task file line (without the newline)."""
    done = "1" if task.done else "0"
    line = f"{task.type.value} | {done} | {task.description}"

    if isinstance(task, Deadline):
        line += f" | by: {format_storage(task.by)}"
    elif isinstance(task, Event):
        line += f" | from: {format_storage(task.start)} | to: {format_storage(task.end)}"

    return line


def decode_task(line: str) -> Task:
    """Decode one task file line.

    Raises:
        CorruptedLine: If the line is malformed in any way.
    """
    parts = _DELIMITER.split(line.strip())
    if len(parts) < 3:
        raise CorruptedLine(f"expected at least 3 fields, got {len(parts)}")

    tag, flag, description = parts[0], parts[1], parts[2]
    done = flag == "1"
    if not description:
        raise CorruptedLine("empty description")

    try:
        task_type = TaskType(tag)
    except ValueError:
        raise CorruptedLine(f"unknown task type {tag!r}") from None

    # A description holding the delimiter would add fields.
    expected = _FIELD_COUNTS[task_type]
    if len(parts) > expected:
        raise CorruptedLine(f"expected {expected} fields, got {len(parts)}")

    if task_type is TaskType.TODO:
        return ToDo(description, done=done)

    if task_type is TaskType.DEADLINE:
        if len(parts) < 4:
            raise CorruptedLine("deadline without a 'by' field")
        by = _field_value(parts[3])
        return Deadline(description, _storage_datetime(by), done=done)

    if len(parts) < 5:
        raise CorruptedLine("event without 'from' and 'to' fields")
    start = _field_value(parts[3])
    end = _field_value(parts[4])
    return Event(description, _storage_datetime(start), _storage_datetime(end), done=done)


def _field_value(part: str) -> str:
    """``"by: 2019-12-02 18:00"`` -> ``"2019-12-02 18:00"``."""
    _, sep, value = part.partition(":")
    value = value.strip()
    if not sep or not value:
        raise CorruptedLine(f"empty field {part!r}")
    return value


def _storage_datetime(text: str) -> datetime:
    try:
        return parse_storage(text)
    except InvalidDateTime as e:
        raise CorruptedLine(str(e)) from None


class Storage:
    """Loads and saves the task file.

    Args:
        data_dir: Directory holding the task file; created on demand.
        file_name: Name of the task file inside ``data_dir``.
        corrupted_suffix: Appended to ``file_name`` to name the recovery file.
    """

    def __init__(
        self,
        data_dir: str | Path = "data",
        file_name: str = DEFAULT_FILE_NAME,
        corrupted_suffix: str = CORRUPTED_SUFFIX,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / file_name
        self.corrupted_path = self.data_dir / f"{file_name}{corrupted_suffix}"

    def load(self) -> LoadResult:
        """Load all tasks from the task file.

        A missing file is created empty. Blank lines are skipped silently;
        malformed lines are counted and backed up, not fatal.

        Raises:
            StorageUnavailable: If the file can't be created or read.
        """
        try:
            if not self.path.exists():
                self.data_dir.mkdir(parents=True, exist_ok=True)
                self.path.touch()
                logger.info("Created empty task file at %s", self.path)
                return LoadResult()

            lines = self.path.read_bytes().splitlines()
        except OSError as e:
            raise StorageUnavailable(f"Ugh. I can't access your data file. {e}") from e

        result = LoadResult()
        for number, raw in enumerate(lines, start=1):
            if not raw.strip():
                continue
            try:
                result.tasks.append(decode_task(raw.decode("utf-8")))
            except ValueError as e:
                result.corrupted_count += 1
                logger.warning("Ugh. Skipping corrupted line %d: %s", number, e)
                self._back_up(raw)

        logger.debug(
            "Loaded %d tasks from %s (%d corrupted)",
            len(result.tasks),
            self.path,
            result.corrupted_count,
        )
        return result

    def save(self, tasks: list[Task]) -> None:
        """Replace the task file with ``tasks``, one line each.

        The new contents are written to a temporary file first and moved
        over the task file, so a failed save leaves the old file in place.

        Raises:
            StorageUnavailable: If any step fails.
        """
        content = "".join(f"{encode_task(task)}\n" for task in tasks)
        tmp_name: str | None = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StorageUnavailable(f"Ugh. I couldn't save your tasks. {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Saved %d tasks to %s", len(tasks), self.path)

    def _back_up(self, line: bytes) -> None:
        """Append a corrupted line, as raw bytes, to the recovery file, best-effort."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.corrupted_path, "ab") as f:
                f.write(line + b"\n")
        except OSError as e:
            logger.warning("Couldn't back up corrupted line to %s: %s", self.corrupted_path, e)

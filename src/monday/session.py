"""A single run of Monday: load, handle lines one at a time, save.

The session owns the task list. Storage problems are logged as warnings
and never end the session; the in-memory tasks stay usable.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from monday.errors import StorageUnavailable
from monday.executor import CommandOutcome, execute
from monday.parser import ParseFailure, parse_command
from monday.storage import LoadResult, Storage
from monday.task_list import MAX_TASKS, TaskList

logger = logging.getLogger(__name__)


class Session:
    """Connects the parser, executor and storage for one user session."""

    def __init__(
        self,
        storage: Storage,
        *,
        quotes_path: Path | None = None,
        rng: random.Random | None = None,
        limit: int = MAX_TASKS,
    ) -> None:
        self.storage = storage
        self.quotes_path = quotes_path
        self.rng = rng or random.Random()
        self.tasks = TaskList(limit=limit)
        self.corrupted_on_load = False
        self.is_running = False

    def start(self) -> LoadResult:
        """Load the task file into the session.

        If the file can't be read the session starts empty.
        """
        try:
            result = self.storage.load()
        except StorageUnavailable as e:
            logger.warning("%s", e)
            result = LoadResult()

        self.tasks = TaskList(result.tasks, limit=self.tasks.limit)
        if len(self.tasks) > self.tasks.limit:
            logger.warning(
                "Task file has %d tasks, over the limit of %d; delete some before adding more",
                len(self.tasks),
                self.tasks.limit,
            )
        self.corrupted_on_load = result.has_corruption
        self.is_running = True
        return result

    def handle(self, line: str) -> CommandOutcome:
        """Parse and run one line of input, saving if the command asks for it."""
        command = parse_command(line)
        if isinstance(command, ParseFailure):
            return CommandOutcome(command.message, error=command.kind)

        outcome = execute(
            command,
            self.tasks,
            corrupted_on_load=self.corrupted_on_load,
            quotes_path=self.quotes_path,
            rng=self.rng,
        )

        if outcome.should_persist:
            self.save()
        if outcome.should_exit:
            self.is_running = False
        return outcome

    def save(self) -> bool:
        """Write the task list to disk. Returns False if the save failed."""
        try:
            self.storage.save(self.tasks.tasks)
        except StorageUnavailable as e:
            logger.warning("%s", e)
            return False
        # The file no longer holds the corrupted lines.
        self.corrupted_on_load = False
        return True

"""Configuration models for monday."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from monday.storage import CORRUPTED_SUFFIX, DEFAULT_FILE_NAME


class StorageConfig(BaseModel):
    """Where the task file lives."""

    data_dir: str = "data"
    file_name: str = DEFAULT_FILE_NAME
    corrupted_suffix: str = CORRUPTED_SUFFIX


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None


class MondayConfig(BaseModel):
    """Main configuration for monday."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    quotes_file: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> MondayConfig:
        """Read ``path`` (default ``.monday/config.json``); defaults if it's absent."""
        path = path or CONFIG_FILE
        if not path.exists():
            return cls()
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, path: Path | None = None) -> None:
        """Write the config as JSON, leaving out unset optional values."""
        path = path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        text = self.model_dump_json(exclude_none=True, indent=2)
        path.write_text(text + "\n", encoding="utf-8")

    @property
    def quotes_path(self) -> Path | None:
        return Path(self.quotes_file) if self.quotes_file else None


# Default config location
MONDAY_DIR = Path(".monday")
CONFIG_FILE = MONDAY_DIR / "config.json"

"""Exception types for monday."""

from __future__ import annotations


class MondayError(Exception):
    """Base class for all monday errors."""


class InvalidDateTime(MondayError, ValueError):
    """Raised when a string matches none of the accepted date formats."""

    def __init__(self, text: str, message: str | None = None) -> None:
        self.text = text
        super().__init__(message or f"Can't understand date: {text!r}")


class StorageUnavailable(MondayError):
    """Raised when the task file cannot be read or written.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

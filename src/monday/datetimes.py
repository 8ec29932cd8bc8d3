"""Date and time parsing for task commands and the task file.

User input is accepted in a small, ordered set of formats. The task file
uses its own storage format, and responses use a separate display format.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from monday.errors import InvalidDateTime

# Tried in order; the first format that matches wins.
DATETIME_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{4}"), "%Y-%m-%d %H%M"),
    (re.compile(r"\d{1,2}/\d{1,2}/\d{4} \d{4}"), "%d/%m/%Y %H%M"),
)

DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{1,2}/\d{1,2}/\d{4}"), "%d/%m/%Y"),
)

STORAGE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}")
STORAGE_FORMAT = "%Y-%m-%d %H:%M"

DATETIME_HINT = "Try 'yyyy-MM-dd HHmm' or 'd/M/yyyy HHmm' format."
DATE_HINT = "Try 'yyyy-MM-dd' or 'd/M/yyyy' format."

# Month names are spelled out so display output does not depend on the locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _parse(text: str, formats: tuple[tuple[re.Pattern[str], str], ...]) -> datetime | None:
    for shape, fmt in formats:
        if not shape.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            # Right shape, impossible value (e.g. month 13)
            continue
    return None


def parse_datetime(text: str) -> datetime:
    """Parse a user-supplied date and time.

    Accepts ``YYYY-MM-DD HHmm`` and ``D/M/YYYY HHmm``, in that order.

    Raises:
        InvalidDateTime: If no accepted format matches.
    """
    parsed = _parse(text.strip(), DATETIME_FORMATS)
    if parsed is None:
        raise InvalidDateTime(text, DATETIME_HINT)
    return parsed


def parse_date(text: str) -> date:
    """Parse a user-supplied date (``YYYY-MM-DD`` or ``D/M/YYYY``).

    Raises:
        InvalidDateTime: If no accepted format matches.
    """
    parsed = _parse(text.strip(), DATE_FORMATS)
    if parsed is None:
        raise InvalidDateTime(text, DATE_HINT)
    return parsed.date()


def parse_storage(text: str) -> datetime:
    """Parse a datetime written by :func:`format_storage`."""
    parsed = _parse(text.strip(), ((STORAGE_PATTERN, STORAGE_FORMAT),))
    if parsed is None:
        raise InvalidDateTime(text)
    return parsed


def format_storage(value: datetime) -> str:
    """Format a datetime for the task file, e.g. ``2019-12-02 18:00``.

    Years are always four digits; ``strftime("%Y")`` does not pad years
    below 1000 on every platform.
    """
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}"
    )


def format_display_date(value: date) -> str:
    """Format a date for responses, e.g. ``Dec 02 2019``."""
    return f"{_MONTHS[value.month - 1]} {value.day:02d} {value.year:04d}"


def format_display(value: datetime) -> str:
    """Format a datetime for responses, e.g. ``Dec 02 2019 1800``."""
    return f"{format_display_date(value.date())} {value.hour:02d}{value.minute:02d}"

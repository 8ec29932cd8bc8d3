"""Console display for Monday's replies."""

from __future__ import annotations

from datetime import date

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from monday.executor import CommandOutcome

BASE_GREETING = (
    "Ugh. It's Monday. YES, THE MONDAY. Unhelpful, unwilling, and exactly what you deserve."
)
HELP_HINT = "Type 'help' for how to use this app. (It's cute that you think it'll work.)"

# Indexed by date.weekday(): Monday is 0.
DAY_REMARKS = (
    "My namesake day. How... fitting.",
    "Tuesday already feels like a decade.",
    "Happy hump day. Not.",
    "Thursday. Almost there. Allegedly.",
    "Friday. Finally. Don't get excited.",
    "Weekend work? Cute.",
    "Sunday scaries already? I live here.",
)

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def greeting(today: date) -> str:
    """Build the startup greeting for ``today``."""
    date_line = (
        f"Today is {_WEEKDAYS[today.weekday()]}, "
        f"{today.day} {_MONTHS[today.month - 1]} {today.year}"
    )
    return "\n\n".join(
        [BASE_GREETING, date_line, DAY_REMARKS[today.weekday()], HELP_HINT]
    ) + "\nWhat do you want?"


def corruption_notice(count: int, file_name: str) -> str:
    unit = "corrupted line" if count == 1 else "corrupted lines"
    return f"Ugh. I skipped {count} {unit}.\nCheck {file_name} for recovery."


class Ui:
    """Renders replies in a panel; errors get a red border."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show(self, message: str, *, error: bool = False) -> None:
        self.console.print(
            Panel(
                Text(message),
                border_style="red" if error else "cyan",
                title="monday",
                title_align="left",
            )
        )

    def show_outcome(self, outcome: CommandOutcome) -> None:
        self.show(outcome.message, error=not outcome.ok)

    def show_greeting(self, today: date | None = None) -> None:
        self.show(greeting(today or date.today()))

    def show_corruption(self, count: int, file_name: str) -> None:
        self.show(corruption_notice(count, file_name), error=True)

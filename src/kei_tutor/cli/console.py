"""Console rendering for the terminal front-end.

Hides how messages, health snapshots and debug logs are drawn.
"""

import time

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..health import HealthSnapshot
from ..memory import Message, Sender


class LogLevel:
    """Numeric thresholds for debug callback levels; higher is more severe."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a level name in any case. Unknown names map to DEBUG."""
        return _LEVELS_BY_NAME.get(level_str.lower(), cls.DEBUG)


_LEVELS_BY_NAME = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

_HEALTH_STYLES = {
    "AI Ready": "green",
    "Model Missing": "yellow",
    "AI Offline": "red",
}


class ConsoleDebugLog:
    """Debug callback that prints component logs at or above a threshold.

    Pass an instance to set_debug_callback(); it is called as
    callback(level, component, message).
    """

    def __init__(self, console: Console, min_level: int = LogLevel.WARNING) -> None:
        self.console = console
        self.min_level = min_level

    def __call__(self, level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < self.min_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        stamp = time.strftime(LOG_TIMESTAMP_FORMAT)
        style = _LEVEL_STYLES.get(numeric, "dim")
        self.console.print(
            f"[dim]{stamp}[/dim] [{style}]{level.upper():<7}[/{style}] "
            f"[bold]{component}[/bold] {escape(message)}",
            markup=True,
            highlight=False
        )


class MessageRenderer:
    """Render callback printing display-ready messages to the console."""

    def __init__(self, console: Console, persona_name: str = "Kei") -> None:
        self.console = console
        self.persona_name = persona_name

    def __call__(self, message: Message) -> None:
        if message.sender == Sender.USER:
            # The user's own line is already on screen from the prompt
            return
        self.console.print(f"[bold green]{self.persona_name}:[/bold green] ", end="")
        self.console.print(message.text, markup=False, highlight=False)
        self.console.print()


def health_table(snapshot: HealthSnapshot) -> Table:
    """Build a table describing a health snapshot."""
    style = _HEALTH_STYLES.get(snapshot.label, "white")

    table = Table(show_header=False, box=None)
    table.add_column("Check", style="bold cyan", width=22)
    table.add_column("Value")

    table.add_row("Status", f"[{style}]{snapshot.label}[/{style}]")
    table.add_row(
        "Ollama Service",
        "[green]Running[/green]" if snapshot.backend_reachable else "[red]Stopped[/red]"
    )
    table.add_row(
        f"Model ({snapshot.model_name})",
        "[green]Available[/green]" if snapshot.model_ready else "[red]Missing[/red]"
    )
    if snapshot.last_error:
        table.add_row("Error", f"[red]{escape(snapshot.last_error)}[/red]")
    return table

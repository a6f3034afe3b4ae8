"""Session factory functions for CLI.

Centralizes creation of the configuration and dialogue session from
environment variables. Hides configuration details from command
implementations.
"""

import typer
from rich.console import Console

from ..config import AppConfig, ConfigError, load_config
from ..dialogue import DialogueSession, get_default_session

# Default console for output
_console = Console()


def get_config(console: Console | None = None) -> AppConfig:
    """Load configuration from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Validated configuration

    Raises:
        typer.Exit: If the configuration is invalid
    """
    con = console or _console
    try:
        return load_config()
    except ConfigError as e:
        con.print("[red]Error: invalid configuration[/red]")
        for error in e.errors:
            con.print(f"  [red]-[/red] {error}")
        raise typer.Exit(code=1)


def get_session(console: Console | None = None) -> DialogueSession:
    """Get the process-wide dialogue session.

    Args:
        console: Optional Rich console for output

    Returns:
        Shared DialogueSession built from the environment configuration
    """
    return get_default_session(get_config(console))

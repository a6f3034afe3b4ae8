"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ..dialogue import DialogueErrorKind, DialogueSession, reset_default_session
from ..memory import Message
from ..prompts import SkillLevel
from .console import ConsoleDebugLog, LogLevel, MessageRenderer, health_table
from .providers import get_config, get_session

# Create Typer app
app = typer.Typer(
    name="kei-tutor",
    help="Chat with Kei, a Bitcoin tutor running on a local Ollama model",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("exit", "quit", "q", "/quit", "/exit")

CHAT_HELP = (
    "[dim]Commands: /level <beginner|intermediate|advanced>, /clear, "
    "/status, /help, /quit[/dim]"
)


def _handle_command(
    session: DialogueSession,
    renderer: MessageRenderer,
    line: str,
    level: SkillLevel
) -> SkillLevel:
    """Run a slash command and return the skill level to use next."""
    command, _, arg = line.partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command == "/level":
        try:
            new_level = SkillLevel(arg.lower())
        except ValueError:
            console.print(f"[yellow]Unknown level '{arg}'.[/yellow] {CHAT_HELP}")
            return level
        console.print(f"[dim]Skill level: {new_level.value} - {new_level.description}[/dim]")
        return new_level

    if command == "/clear":
        session.reset()
        console.print("[dim]Chat history cleared.[/dim]")
        renderer(Message.assistant(session.greeting(level)))
        return level

    if command == "/status":
        console.print(health_table(session.get_status()))
        return level

    console.print(CHAT_HELP)
    return level


@app.command()
def chat(
    level: SkillLevel = typer.Option(
        SkillLevel.BEGINNER,
        "--level",
        "-l",
        help="Skill level for the conversation",
        case_sensitive=False
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Minimum log level to show (debug, info, warning, error)"
    )
):
    """Interactive tutoring chat."""
    async def _chat():
        session = get_session(console)
        renderer = MessageRenderer(console, session.persona_name)
        session.set_message_callback(renderer)
        session.set_debug_callback(ConsoleDebugLog(console, LogLevel.from_string(log_level)))

        current = level
        try:
            snapshot = await session.start()

            console.print("[bold cyan]Bitcoin Education Chat[/bold cyan]")
            console.print(f"[dim]Backend: {snapshot.label}. Type '/quit' to leave.[/dim]")
            console.print(CHAT_HELP + "\n")
            renderer(Message.assistant(session.greeting(current)))

            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                line = user_input.strip()
                if not line:
                    continue
                if line.lower() in EXIT_COMMANDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if line.startswith("/"):
                    current = _handle_command(session, renderer, line, current)
                    continue

                with console.status(f"[dim]{session.persona_name} is thinking...[/dim]"):
                    result = await session.send(user_input, current)

                if result.error == DialogueErrorKind.VALIDATION:
                    console.print(f"[yellow]{result.response}[/yellow]")

        finally:
            await session.close()
            await reset_default_session()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        console.print("\n[dim]Goodbye![/dim]")


@app.command()
def status(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Minimum log level to show (debug, info, warning, error)"
    )
):
    """Probe the Ollama backend once and show its health."""
    async def _status():
        session = get_session(console)
        session.set_debug_callback(ConsoleDebugLog(console, LogLevel.from_string(log_level)))
        try:
            snapshot = await session.health.probe()
        finally:
            await session.close()
            await reset_default_session()

        console.print(health_table(snapshot))
        if not snapshot.is_ready:
            raise typer.Exit(code=1)

    asyncio.run(_status())


@app.command(name="config")
def show_config():
    """Show the effective configuration."""
    config = get_config(console)

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="bold cyan", width=26)
    table.add_column("Value")

    table.add_row("Ollama URL", config.ollama.url)
    table.add_row("Model", config.ollama.model)
    table.add_row("Request timeout", f"{config.ollama.timeout_ms} ms")
    table.add_row("Max history length", str(config.chat.max_history_length))
    table.add_row("Health check interval", f"{config.chat.health_check_interval_ms} ms")
    table.add_row("Max message length", str(config.chat.max_message_length))
    table.add_row("Prompt context window", str(config.chat.context_window))
    table.add_row("Persona", config.chat.persona_name)

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

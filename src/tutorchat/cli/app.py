"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..conversation import Sender
from ..session import ConversationSession
from ..ui.formatting import format_plain
from .providers import get_config, get_session

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="tutorchat",
    help="Conversational client for a remote tutoring endpoint",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}

EndpointOption = typer.Option(
    None,
    "--endpoint",
    "-e",
    help="Tutor gateway URL (default: $TUTOR_GATEWAY_URL or http://localhost:3000/api/gemini)"
)
TimeoutOption = typer.Option(
    None,
    "--timeout",
    "-t",
    help="Seconds to wait for a reply, 0 for no limit (default: $TUTOR_GATEWAY_TIMEOUT or 30)"
)


def _console_debug(level: str, component: str, message: str) -> None:
    style = _LEVEL_STYLES.get(level, "dim")
    console.print(f"[{style}]\\[{level}] \\[{component}] {escape(message)}[/{style}]")


def _print_reply(session: ConversationSession) -> None:
    """Print the newest tutor message and any surfaced error."""
    message = session.state.last_message
    if message is not None and message.sender == Sender.BOT:
        console.print(f"[green]{escape(format_plain(message))}[/green]\n")
    if session.state.last_error is not None:
        console.print(f"[red]Error: {escape(session.state.last_error)}[/red]")


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send to the tutor"),
    endpoint: str | None = EndpointOption,
    timeout: float | None = TimeoutOption,
):
    """Send a single message and print the tutor's reply."""
    config = get_config(console, endpoint=endpoint, timeout=timeout)

    async def _ask() -> bool:
        async with get_session(config) as session:
            accepted = await session.send(message)
            if not accepted:
                console.print("[yellow]Nothing to send: the message is empty.[/yellow]")
                return False
            _print_reply(session)
            return session.state.last_error is None

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


@app.command()
def chat(
    endpoint: str | None = EndpointOption,
    timeout: float | None = TimeoutOption,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print dispatch trace messages"
    ),
):
    """Interactive console chat with the tutor."""
    config = get_config(console, endpoint=endpoint, timeout=timeout)

    async def _chat():
        async with get_session(config) as session:
            if verbose:
                session.set_debug_callback(_console_debug)

            console.print("[bold cyan]Tutor Chat[/bold cyan]")
            console.print(f"[dim]Gateway: {config.gateway_url}[/dim]")
            console.print("[dim]Type '/clear' to start over, 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/clear":
                    session.reset()
                    console.print("[dim]Chat cleared.[/dim]\n")
                    continue

                with console.status("[dim]Tutor is typing...[/dim]"):
                    await session.send(user_input)
                _print_reply(session)
                # The console has no toast; the printed error is the surfacing.
                session.dismiss_error()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command(name="tui")
def tui_command(
    endpoint: str | None = EndpointOption,
    timeout: float | None = TimeoutOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    config = get_config(console, endpoint=endpoint, timeout=timeout, log_level=log_level)

    async def _tui():
        from ..ui import run_tutor_tui

        async with get_session(config) as session:
            await run_tutor_tui(session, log_level=config.log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

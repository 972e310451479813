"""Provider factory functions for CLI.

Centralizes creation of the configuration, gateway and session from
environment variables and command-line overrides. Hides configuration
details from command implementations.
"""

from rich.console import Console
from rich.markup import escape

from ..config import TutorChatConfig, load_config
from ..gateway import create_tutor_gateway
from ..session import ConversationSession

# Default console for output
_console = Console()


def get_config(
    console: Console | None = None,
    endpoint: str | None = None,
    timeout: float | None = None,
    log_level: str | None = None,
) -> TutorChatConfig:
    """Load configuration, exiting with a readable message if it is invalid.

    Args:
        console: Optional Rich console for output
        endpoint: Gateway URL override
        timeout: Timeout override in seconds (0 disables the limit)
        log_level: Log panel level override

    Returns:
        Validated configuration

    Raises:
        SystemExit: If a setting is invalid
    """
    import typer

    con = console or _console
    try:
        return load_config(gateway_url=endpoint, timeout=timeout, log_level=log_level)
    except ValueError as e:
        con.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_session(config: TutorChatConfig) -> ConversationSession:
    """Create a conversation session talking to the configured gateway.

    Args:
        config: Validated configuration

    Returns:
        New ConversationSession with an empty transcript
    """
    gateway = create_tutor_gateway(
        "http",
        endpoint=config.gateway_url,
        timeout=config.timeout,
    )
    return ConversationSession(gateway)

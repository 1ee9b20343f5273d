"""Main CLI application using Typer."""
import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.text import Text

from ..conversation import MessageRole
from ..ui.config import LogLevel
from ..ui.formatting import render_markup
from .providers import get_session

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chabby",
    help="Terminal chat client for a hosted conversational agent",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
}


def _console_logger(log_level: str):
    """Build a debug callback that prints entries at or above log_level."""
    threshold = LogLevel.from_string(log_level)

    def _log(level: str, component: str, message: str) -> None:
        if LogLevel.from_string(level) < threshold:
            return
        line = Text()
        line.append(f"{level.upper():<7} ", style=LEVEL_STYLES.get(level, ""))
        line.append(f"[{component}] ", style="bold")
        line.append(message)
        console.print(line)

    return _log


@app.command()
def chat(
    backend: str | None = typer.Option(
        None,
        "--backend",
        "-b",
        help="Agent backend: http or openai (default: CHABBY_AGENT_BACKEND or http)"
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Agent endpoint for the http backend"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for a reply (default: wait indefinitely)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_chat_tui

        session = get_session(console, backend=backend, url=url, timeout=timeout)
        try:
            await run_chat_tui(session, log_level=log_level)
        finally:
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    message: str = typer.Argument(
        ...,
        help="Message to send to the agent"
    ),
    backend: str | None = typer.Option(
        None,
        "--backend",
        "-b",
        help="Agent backend: http or openai (default: CHABBY_AGENT_BACKEND or http)"
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Agent endpoint for the http backend"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for a reply (default: wait indefinitely)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print diagnostics at level: debug (all), info, warning, or error"
    ),
):
    """Send one message and print the agent's reply."""
    async def _ask():
        session = get_session(console, backend=backend, url=url, timeout=timeout)
        if log_level is not None:
            session.set_debug_callback(_console_logger(log_level))

        try:
            with console.status("[dim]Waiting for the agent...[/dim]"):
                reply = await session.submit(message)
        finally:
            await session.close()

        if reply is None:
            console.print("[red]Error: Message is empty[/red]")
            raise typer.Exit(code=1)

        if reply.role == MessageRole.ERROR:
            console.print(Text(reply.content, style="red"))
            raise typer.Exit(code=1)

        console.print(render_markup(reply.content))

    asyncio.run(_ask())


@app.command()
def render(
    file: Path | None = typer.Argument(
        None,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="File with markup to render (default: read stdin)"
    ),
):
    """Render reply markup (headings, lists, bold, code) to the terminal."""
    try:
        content = file.read_text(encoding="utf-8") if file else sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(render_markup(content))


if __name__ == "__main__":
    app()

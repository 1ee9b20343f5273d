"""Provider factory functions for CLI.

Centralizes creation of the agent client and chat session from environment
variables. Hides configuration details from command implementations.
"""

import os

from rich.console import Console

from ..agent import AgentClient, create_agent_client
from ..agent.providers.http import DEFAULT_AGENT_URL
from ..session import ChatSession

# Default console for output
_console = Console()


def get_timeout(timeout: float | None = None) -> float | None:
    """Resolve the agent timeout.

    Args:
        timeout: Explicit timeout from the command line, takes precedence

    Returns:
        Timeout in seconds, or None to wait indefinitely

    Environment variables:
        CHABBY_AGENT_TIMEOUT: Seconds to wait for a reply (default: unset)
    """
    if timeout is not None:
        return timeout
    raw = os.getenv("CHABBY_AGENT_TIMEOUT")
    if not raw:
        return None
    return float(raw)


def get_agent_client(
    console: Console | None = None,
    backend: str | None = None,
    url: str | None = None,
) -> AgentClient:
    """Create agent client from environment variables.

    Args:
        console: Optional Rich console for output
        backend: Backend override ('http' or 'openai')
        url: Endpoint override for the http backend

    Returns:
        Agent client instance

    Raises:
        SystemExit: If the backend is unknown or its credentials are missing

    Environment variables:
        CHABBY_AGENT_BACKEND: Backend type (http, openai; default: http)
        CHABBY_AGENT_URL: Agent endpoint (default: http://localhost:3000/api/agent)
        CHABBY_API_KEY: Optional key for the http backend
        OPENAI_API_KEY: OpenAI API key (for openai backend)
        OPENAI_BASE_URL: OpenAI-compatible endpoint (optional)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
    """
    import typer

    con = console or _console
    agent_backend = (backend or os.getenv("CHABBY_AGENT_BACKEND", "http")).lower()

    if agent_backend == "http":
        return create_agent_client(
            "http",
            url=url or os.getenv("CHABBY_AGENT_URL", DEFAULT_AGENT_URL),
            api_key=os.getenv("CHABBY_API_KEY"),
        )

    elif agent_backend == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[red]Error: OPENAI_API_KEY not set in environment[/red]")
            raise typer.Exit(code=1)
        return create_agent_client(
            "openai",
            api_key=api_key,
            model=os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini"),
            base_url=os.getenv("OPENAI_BASE_URL"),
        )

    else:
        con.print(f"[red]Error: Unknown agent backend: {agent_backend}[/red]")
        raise typer.Exit(code=1)


def get_session(
    console: Console | None = None,
    backend: str | None = None,
    url: str | None = None,
    timeout: float | None = None,
) -> ChatSession:
    """Create a chat session around the configured agent client.

    Raises:
        SystemExit: If the agent client cannot be configured
    """
    client = get_agent_client(console, backend=backend, url=url)
    return ChatSession(client, timeout=get_timeout(timeout))

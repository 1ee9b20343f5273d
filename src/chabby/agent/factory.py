from typing import Any

from .base import AgentClient


def create_agent_client(backend: str = "http", **config: Any) -> AgentClient:
    """Create an agent client.

    This factory function hides the instantiation logic for different backends.

    Args:
        backend: Backend type ('http' or 'openai')
        **config: Backend-specific configuration
            For http:
                - url: str (default: 'http://localhost:3000/api/agent')
                - api_key: str | None
                - timeout: float | None
            For openai:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None

    Returns:
        Initialized agent client

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_agent_client("http", url="http://localhost:3000/api/agent")

        >>> client = create_agent_client("openai", api_key="sk-...", model="gpt-4o-mini")
    """
    backend_lower = backend.lower()

    if backend_lower == "http":
        from .providers.http import HttpAgentClient
        return HttpAgentClient(**config)

    if backend_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI agent backend requires 'api_key' in config")
        from .providers.openai import OpenAIAgentClient
        return OpenAIAgentClient(**config)

    raise ValueError(
        f"Unsupported agent backend: {backend}. "
        f"Supported backends: 'http', 'openai'"
    )

import time
from typing import Any

import httpx
from pydantic import ValidationError

from ..base import AgentClient
from ..models import AgentResult

DEFAULT_AGENT_URL = "http://localhost:3000/api/agent"


class HttpAgentClient(AgentClient):
    """Agent backend that POSTs to a JSON agent endpoint.

    Hidden design decisions:
    - Request body shape (``{"message": ..., "agent_id": ...}``)
    - Authentication header
    - Mapping of HTTP status codes and malformed bodies to failed results

    Transport errors from httpx propagate to the caller unchanged.
    """

    def __init__(
        self,
        url: str = DEFAULT_AGENT_URL,
        api_key: str | None = None,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize the HTTP agent client.

        Args:
            url: Agent endpoint URL
            api_key: Optional key sent as the ``x-api-key`` header
            timeout: Per-request timeout in seconds (None disables it)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        super().__init__()
        self._url = url
        headers = {"content-type": "application/json"}
        if api_key:
            headers["x-api-key"] = api_key
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            **client_kwargs
        )

    @property
    def url(self) -> str:
        """Get the endpoint URL."""
        return self._url

    async def call_agent(self, message: str, agent_id: str) -> AgentResult:
        """POST the message to the agent endpoint."""
        self._debug("debug", "HTTP", f"POST {self._url} ({len(message)} chars)")
        start = time.perf_counter()

        response = await self._client.post(
            self._url,
            json={"message": message, "agent_id": agent_id},
        )
        elapsed = time.perf_counter() - start
        self._debug("debug", "HTTP", f"HTTP {response.status_code} in {elapsed:.2f}s")

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            if not isinstance(body, dict):
                return AgentResult.failed("The agent returned an unreadable response.")
            try:
                return AgentResult.model_validate(body)
            except ValidationError as e:
                self._debug("warning", "HTTP", f"Unexpected response shape: {e.error_count()} error(s)")
                return AgentResult.failed("The agent returned an unexpected response.")

        if isinstance(body, dict):
            try:
                result = AgentResult.model_validate(body)
            except ValidationError:
                result = None
            if result is not None and (result.error or result.response):
                return result.model_copy(update={"success": False})

        return AgentResult.failed(f"Agent request failed with status {response.status_code}")

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @property
    def backend_type(self) -> str:
        return "http"

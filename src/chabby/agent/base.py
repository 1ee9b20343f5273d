from abc import ABC, abstractmethod
from typing import Any

from .models import AgentResult


class AgentClient(ABC):
    """Abstract base class for agent backends.

    This module hides the design decision of how the conversational agent is
    reached. Implementations must:
    - Return ``AgentResult(success=False, ...)`` for failures the agent reports
    - Raise for transport-level failures (connection refused, DNS, timeouts)

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            result = await client.call_agent("hello", CHAT_AGENT_ID)
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @abstractmethod
    async def call_agent(self, message: str, agent_id: str) -> AgentResult:
        """Send one user message to the agent.

        Args:
            message: The user's text
            agent_id: Identifier of the agent to address

        Returns:
            AgentResult describing success or the agent-reported failure

        Raises:
            Exception: Transport-level failures
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "AgentClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup, a known
        race in httpx/anyio shutdown: https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise

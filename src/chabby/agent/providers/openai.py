import time
from typing import Any

from openai import APIStatusError, AsyncOpenAI

from ..base import AgentClient
from ..models import AgentResult

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly, helpful chat assistant. Format answers with simple "
    "markdown: '#' headings, '-' or numbered lists, **bold** and `code`."
)


class OpenAIAgentClient(AgentClient):
    """Agent backend built on an OpenAI-compatible Chat Completions API.

    Hidden design decisions:
    - OpenAI API client initialization
    - System prompt that steers output toward the supported markup subset
    - Mapping of API status errors to failed results

    Connection errors propagate so the caller can treat them as transport
    failures. Works with any OpenAI-compatible endpoint via ``base_url``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        temperature: float = 0.7,
        **client_kwargs: Any
    ):
        """Initialize OpenAI agent client.

        Args:
            api_key: OpenAI API key
            model: Chat model to use
            base_url: Optional custom API base URL
            system_prompt: Instructions sent ahead of every message
            temperature: Sampling temperature
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__()
        self._model = model
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    async def call_agent(self, message: str, agent_id: str) -> AgentResult:
        """Send the message as a single-turn chat completion."""
        self._debug("debug", "LLM", f"chat.completions.create model={self._model} agent={agent_id}")
        start = time.perf_counter()

        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": message},
                ],
                temperature=self._temperature,
                user=agent_id,
            )
        except APIStatusError as e:
            self._debug("warning", "LLM", f"API status {e.status_code}: {e.message}")
            return AgentResult.failed(e.message)

        elapsed = time.perf_counter() - start
        content = completion.choices[0].message.content if completion.choices else None
        self._debug("debug", "LLM", f"Completion received in {elapsed:.2f}s")

        if not content:
            return AgentResult.failed("The model returned an empty response.")
        return AgentResult.ok(content)

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()

    @property
    def backend_type(self) -> str:
        return "openai"

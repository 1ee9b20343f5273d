"""Data models for agent call results.

The agent endpoint returns loosely shaped JSON. These models pin down the
fields the client understands while tolerating anything extra. Only
``success`` is validated strictly; mistyped content fields are coerced or
dropped so extraction can still fall back through the remaining fields.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# The one agent this client talks to
CHAT_AGENT_ID = "699b595299a581580fa6037c"


def _coerce_text(value: Any) -> str | None:
    """Keep strings, stringify other truthy values, drop empty ones."""
    if isinstance(value, str):
        return value
    if not value:
        return None
    return str(value)


class AgentResponse(BaseModel):
    """Nested response payload of an agent call."""

    model_config = ConfigDict(frozen=True, extra="allow")

    result: Any = Field(
        default=None,
        description="Agent output, usually text (possibly JSON-encoded) or structured data"
    )
    message: str | None = Field(default=None, description="Optional status or fallback text")

    @field_validator("message", mode="before")
    @classmethod
    def _message_as_text(cls, v: Any) -> str | None:
        return _coerce_text(v)


class AgentResult(BaseModel):
    """Outcome of a single agent call.

    ``success`` tags the result: a failed call carries its detail in
    ``error`` (or ``response.message``) instead of raising.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    success: bool = Field(default=False, description="Whether the agent produced a response")
    response: AgentResponse | None = Field(default=None)
    message: str | None = Field(default=None, description="Top-level fallback text")
    error: str | None = Field(default=None, description="Failure detail when success is False")

    @field_validator("response", mode="before")
    @classmethod
    def _drop_non_object_response(cls, v: Any) -> Any:
        if isinstance(v, (dict, AgentResponse)):
            return v
        return None

    @field_validator("message", "error", mode="before")
    @classmethod
    def _fields_as_text(cls, v: Any) -> str | None:
        return _coerce_text(v)

    @classmethod
    def ok(cls, result: Any) -> "AgentResult":
        """Build a successful result around a payload."""
        return cls(success=True, response=AgentResponse(result=result))

    @classmethod
    def failed(cls, error: str) -> "AgentResult":
        """Build an agent-reported failure."""
        return cls(success=False, error=error)

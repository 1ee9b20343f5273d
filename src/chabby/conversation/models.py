"""Data models for conversations.

Messages form an append-only log: once created they are never mutated.
Conversations are immutable snapshots; the store replaces a conversation
with an updated copy on every append.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TITLE = "New Conversation"
TITLE_MAX_LENGTH = 32
ELLIPSIS = "..."


def truncate_title(text: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Shorten text for use as a conversation title.

    Text at or under ``max_length`` is returned verbatim; longer text is cut
    to exactly ``max_length`` characters followed by ``ELLIPSIS``.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


class MessageRole(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"
    ERROR = "error"


class Message(BaseModel):
    """One turn in a conversation.

    Attributes:
        id: Identifier, unique within its conversation
        role: User, Assistant or Error
        content: Message text
        timestamp: Creation time
        retry_source: Original text of a failed send; Error messages only
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    retry_source: str | None = Field(
        default=None,
        description="Text to resubmit when retrying a failed send"
    )

    @model_validator(mode="after")
    def _retry_only_on_errors(self) -> "Message":
        if self.retry_source is not None and self.role != MessageRole.ERROR:
            raise ValueError("retry_source is only allowed on error messages")
        return self

    @property
    def is_retryable(self) -> bool:
        return self.retry_source is not None


class Conversation(BaseModel):
    """A titled, ordered history of messages."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = DEFAULT_TITLE
    messages: tuple[Message, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def get_message(self, message_id: str) -> Message | None:
        """Find a message by id."""
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

"""Conversation module for chabby.

Provides the in-memory conversation store, its data models, and the fixed
sample dataset shown when no live conversation exists.
"""

from .models import (
    DEFAULT_TITLE,
    ELLIPSIS,
    TITLE_MAX_LENGTH,
    Conversation,
    Message,
    MessageRole,
    truncate_title,
)
from .samples import build_sample_conversations
from .store import ConversationStore

__all__ = [
    "DEFAULT_TITLE",
    "ELLIPSIS",
    "TITLE_MAX_LENGTH",
    "Conversation",
    "ConversationStore",
    "Message",
    "MessageRole",
    "build_sample_conversations",
    "truncate_title",
]

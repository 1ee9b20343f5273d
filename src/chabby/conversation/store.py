"""In-memory conversation store with the sample/live overlay.

Simple list-based storage for session-only conversations.
Data is lost when the application exits.

Overlay rule: while the sample view is enabled AND there are no live
conversations, reads are served from the fixed sample dataset. Writes never
touch the sample dataset; creating a conversation materializes a live entry
and clears the overlay.
"""

from collections.abc import Callable
from datetime import datetime

from ..ids import IdGenerator, generate_id
from .models import DEFAULT_TITLE, Conversation, Message, MessageRole, truncate_title
from .samples import build_sample_conversations


class ConversationStore:
    """Process-wide collection of conversations and the active selection.

    Live conversations are kept most-recently-created first. Every operation
    is total: unknown ids are ignored rather than raising.
    """

    def __init__(
        self,
        id_generator: IdGenerator = generate_id,
        clock: Callable[[], datetime] = datetime.now,
        sample_conversations: tuple[Conversation, ...] | None = None,
    ):
        self._generate_id = id_generator
        self._clock = clock
        self._samples = (
            sample_conversations
            if sample_conversations is not None
            else build_sample_conversations(clock())
        )
        self._conversations: list[Conversation] = []
        self._active_id: str | None = None
        self._using_sample_view = False

    @property
    def conversations(self) -> tuple[Conversation, ...]:
        """Live conversations, most recently created first."""
        return tuple(self._conversations)

    @property
    def sample_conversations(self) -> tuple[Conversation, ...]:
        return self._samples

    @property
    def active_conversation_id(self) -> str | None:
        return self._active_id

    @property
    def using_sample_view(self) -> bool:
        """Whether the sample view flag is set (not necessarily showing)."""
        return self._using_sample_view

    @property
    def is_showing_sample(self) -> bool:
        """Whether reads are currently served from the sample dataset."""
        return self._using_sample_view and not self._conversations

    def visible_conversations(self) -> list[Conversation]:
        """Conversations to display: samples when the overlay applies, else live."""
        if self.is_showing_sample:
            return list(self._samples)
        return list(self._conversations)

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Find a conversation in the visible collection."""
        for conversation in self.visible_conversations():
            if conversation.id == conversation_id:
                return conversation
        return None

    def has_live_conversation(self, conversation_id: str) -> bool:
        return self._live_index(conversation_id) is not None

    def active_conversation(self) -> Conversation | None:
        """The active conversation, resolved against the visible collection."""
        if self._active_id is None:
            return None
        return self.get_conversation(self._active_id)

    def create_conversation(self) -> str:
        """Insert a new empty conversation at the front and make it active.

        Clears the sample overlay if it was showing.

        Returns:
            The new conversation id
        """
        conversation = Conversation(
            id=self._generate_id(),
            title=DEFAULT_TITLE,
            created_at=self._clock(),
        )
        if self.is_showing_sample:
            self._using_sample_view = False
        self._conversations.insert(0, conversation)
        self._active_id = conversation.id
        return conversation.id

    def select_conversation(self, conversation_id: str) -> bool:
        """Make a visible conversation active.

        Returns:
            True if selected, False if the id is not visible (no-op)
        """
        if self.get_conversation(conversation_id) is None:
            return False
        self._active_id = conversation_id
        return True

    def delete_conversation(self, conversation_id: str) -> bool:
        """Remove a live conversation.

        Clears the active id if it pointed at the deleted conversation; no other
        conversation is auto-selected. Forbidden while the sample dataset is shown.

        Returns:
            True if a conversation was removed
        """
        if self.is_showing_sample:
            return False
        index = self._live_index(conversation_id)
        if index is None:
            return False
        del self._conversations[index]
        if self._active_id == conversation_id:
            self._active_id = None
        return True

    def append_message(self, conversation_id: str, message: Message) -> Message | None:
        """Append a message to a live conversation.

        The first message of a conversation, if it is a user message, sets the
        title. Timestamps are clamped so they never go backwards within a
        conversation.

        Returns:
            The stored message, or None if the id is not a live conversation
        """
        index = self._live_index(conversation_id)
        if index is None:
            return None

        conversation = self._conversations[index]
        last = conversation.last_message
        if last is not None and message.timestamp < last.timestamp:
            message = message.model_copy(update={"timestamp": last.timestamp})

        update: dict = {"messages": (*conversation.messages, message)}
        if not conversation.messages and message.role == MessageRole.USER:
            update["title"] = truncate_title(message.content)

        self._conversations[index] = conversation.model_copy(update=update)
        return message

    def enable_sample_view(self) -> None:
        """Turn the sample overlay on.

        Substitution only happens while there are no live conversations. If the
        active id is not a live conversation, the first sample becomes active
        when the samples are visible; otherwise the active id is cleared.
        """
        self._using_sample_view = True
        if self._active_id is None or not self.has_live_conversation(self._active_id):
            if self.is_showing_sample and self._samples:
                self._active_id = self._samples[0].id
            else:
                self._active_id = None

    def disable_sample_view(self) -> None:
        """Turn the sample overlay off and select the newest live conversation."""
        self._using_sample_view = False
        self._active_id = self._conversations[0].id if self._conversations else None

    def _live_index(self, conversation_id: str) -> int | None:
        for index, conversation in enumerate(self._conversations):
            if conversation.id == conversation_id:
                return index
        return None

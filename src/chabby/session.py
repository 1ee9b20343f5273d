"""Send pipeline for chat conversations.

Hides the state machine that turns a user submission into store writes:

    Idle --submit--> Sending --(agent call completes or faults)--> Idle

At most one agent call is outstanding at a time. A submission while Sending
is rejected, never queued. Agent failures and transport faults both become
Error messages carrying the original text so the send can be retried.
"""

import asyncio
import time
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ValidationError

from .agent import CHAT_AGENT_ID, AgentClient, AgentResult, extract_response_text
from .conversation import ConversationStore, Message, MessageRole
from .ids import IdGenerator, generate_id

FAILED_RESPONSE_TEXT = "Failed to get a response. Please try again."
NETWORK_ERROR_TEXT = "A network error occurred. Please check your connection and try again."
TIMEOUT_ERROR_TEXT = "The agent did not respond in time. Please try again."


class SendState(str, Enum):
    """Pipeline state."""

    IDLE = "idle"
    SENDING = "sending"


class ChatSession:
    """Owns the conversation store, the in-flight guard and the draft buffer.

    All user-facing chat operations go through one session object instead of
    module-level state.
    """

    def __init__(
        self,
        client: AgentClient,
        store: ConversationStore | None = None,
        agent_id: str = CHAT_AGENT_ID,
        id_generator: IdGenerator = generate_id,
        clock: Callable[[], datetime] = datetime.now,
        timeout: float | None = None,
    ):
        """Initialize the session.

        Args:
            client: Agent backend used for every send
            store: Conversation store (a fresh one is created if omitted)
            agent_id: Identifier of the agent to address
            id_generator: Source of message identifiers
            clock: Source of message timestamps
            timeout: Seconds to wait for the agent; None waits indefinitely
        """
        self._client = client
        self._store = store or ConversationStore(id_generator=id_generator, clock=clock)
        self._agent_id = agent_id
        self._generate_id = id_generator
        self._clock = clock
        self._timeout = timeout
        self._state = SendState.IDLE
        self._active_agent_id: str | None = None
        self._debug_callback: Any | None = None
        self._update_callback: Any | None = None
        self.draft = ""

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def client(self) -> AgentClient:
        return self._client

    @property
    def agent_id(self) -> str:
        return self._agent_id

    @property
    def state(self) -> SendState:
        return self._state

    @property
    def is_sending(self) -> bool:
        """True while an agent call is outstanding."""
        return self._state is SendState.SENDING

    @property
    def active_agent_id(self) -> str | None:
        """The agent currently working on a reply, for display only."""
        return self._active_agent_id

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback
        self._client.set_debug_callback(callback)

    def set_update_callback(self, callback: Any) -> None:
        """Set a callback invoked whenever the store or send state changes.

        Args:
            callback: Callable() with no arguments
        """
        self._update_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _notify_update(self) -> None:
        if self._update_callback:
            self._update_callback()

    def new_chat(self) -> str:
        """Start a new conversation and clear the draft."""
        conversation_id = self._store.create_conversation()
        self.draft = ""
        self._debug("info", "Store", f"Created conversation {conversation_id}")
        self._notify_update()
        return conversation_id

    async def submit(self, text: str, conversation_id: str | None = None) -> Message | None:
        """Send a user message and append the agent's reply.

        Args:
            text: The user's input (surrounding whitespace is trimmed)
            conversation_id: Target conversation; defaults to the active one

        Returns:
            The appended Assistant or Error message, or None if the submission
            was rejected (empty input, a send already in flight, unknown target)
        """
        trimmed = text.strip()
        if not trimmed:
            self._debug("debug", "Session", "Rejected empty submission")
            return None
        if self._state is SendState.SENDING:
            self._debug("warning", "Session", "Rejected submission: a send is already in flight")
            return None

        target_id = self._resolve_target(conversation_id)
        if target_id is None:
            return None

        # Everything up to the agent call runs without yielding, so the guard
        # check above and the state change below cannot interleave with another submit.
        self._store.append_message(target_id, self._new_message(MessageRole.USER, trimmed))
        self.draft = ""
        self._state = SendState.SENDING
        self._active_agent_id = self._agent_id
        self._notify_update()

        try:
            reply = await self._dispatch(trimmed)
            stored = self._store.append_message(target_id, reply)
            if stored is None:
                self._debug("warning", "Store", f"Conversation {target_id} was deleted before the reply arrived")
            return stored
        finally:
            self._active_agent_id = None
            self._state = SendState.IDLE
            self._notify_update()

    async def retry(self, retry_source: str) -> Message | None:
        """Resubmit the text of a failed send as a fresh message."""
        self._debug("info", "Session", "Retrying failed send")
        return await self.submit(retry_source)

    async def close(self) -> None:
        """Close the agent client."""
        await self._client.close()

    def _resolve_target(self, conversation_id: str | None) -> str | None:
        if self._store.is_showing_sample:
            new_id = self._store.create_conversation()
            self._debug("info", "Store", f"Materialized conversation {new_id} from the sample view")
            return new_id

        target_id = conversation_id or self._store.active_conversation_id
        if target_id is None:
            new_id = self._store.create_conversation()
            self._debug("info", "Store", f"Created conversation {new_id} for first message")
            return new_id

        if not self._store.has_live_conversation(target_id):
            self._debug("warning", "Session", f"Rejected submission: unknown conversation {target_id}")
            return None
        return target_id

    def _new_message(self, role: MessageRole, content: str, retry_source: str | None = None) -> Message:
        return Message(
            id=self._generate_id(),
            role=role,
            content=content,
            timestamp=self._clock(),
            retry_source=retry_source,
        )

    async def _dispatch(self, text: str) -> Message:
        """Call the agent and convert the outcome into a reply message."""
        self._debug("info", "Agent", f"Calling agent {self._agent_id} via {self._client.backend_type}")
        start = time.perf_counter()

        try:
            call = self._client.call_agent(text, self._agent_id)
            if self._timeout is not None:
                result = await asyncio.wait_for(call, timeout=self._timeout)
            else:
                result = await call
        except Exception as e:
            if isinstance(e, TimeoutError) and self._timeout is not None:
                self._debug("error", "Agent", f"No response after {self._timeout}s")
                return self._new_message(MessageRole.ERROR, TIMEOUT_ERROR_TEXT, retry_source=text)
            self._debug("error", "Agent", f"Transport failure: {type(e).__name__}: {e}")
            return self._new_message(MessageRole.ERROR, NETWORK_ERROR_TEXT, retry_source=text)

        elapsed = time.perf_counter() - start
        self._debug("info", "Agent", f"Agent call finished in {elapsed:.2f}s")

        if not isinstance(result, AgentResult):
            try:
                result = AgentResult.model_validate(result)
            except ValidationError:
                self._debug("error", "Agent", f"Unrecognized result type: {type(result).__name__}")
                return self._new_message(MessageRole.ERROR, FAILED_RESPONSE_TEXT, retry_source=text)

        if result.success:
            return self._new_message(MessageRole.ASSISTANT, extract_response_text(result))

        detail = result.error or (result.response.message if result.response else None)
        self._debug("warning", "Agent", f"Agent reported failure: {detail or 'no detail'}")
        return self._new_message(MessageRole.ERROR, detail or FAILED_RESPONSE_TEXT, retry_source=text)

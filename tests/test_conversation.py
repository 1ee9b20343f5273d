"""Unit tests for conversation models and the conversation store."""
from datetime import datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from chabby.conversation import (
    DEFAULT_TITLE,
    ELLIPSIS,
    TITLE_MAX_LENGTH,
    Conversation,
    ConversationStore,
    Message,
    MessageRole,
    build_sample_conversations,
    truncate_title,
)

BASE_TIME = datetime(2026, 3, 14, 9, 30, 0)


def user(message_id: str, content: str, **kwargs) -> Message:
    return Message(id=message_id, role=MessageRole.USER, content=content, **kwargs)


class TestTruncateTitle:
    """Tests for title truncation."""

    def test_short_text_unchanged(self):
        """Test text under the limit."""
        assert truncate_title("Hello") == "Hello"

    def test_exact_limit_unchanged(self):
        """Test text exactly at the limit."""
        text = "x" * TITLE_MAX_LENGTH
        assert truncate_title(text) == text

    def test_long_text_cut_with_ellipsis(self):
        """Test text one character over the limit."""
        text = "y" * (TITLE_MAX_LENGTH + 1)
        assert truncate_title(text) == "y" * TITLE_MAX_LENGTH + "..."

    @given(st.text())
    def test_truncation_law(self, text: str):
        """Property test: short text is verbatim, long text is a 32-char prefix plus ellipsis."""
        title = truncate_title(text)

        if len(text) <= TITLE_MAX_LENGTH:
            assert title == text
        else:
            assert title == text[:TITLE_MAX_LENGTH] + ELLIPSIS
            assert len(title) == TITLE_MAX_LENGTH + len(ELLIPSIS)


class TestModels:
    """Tests for Message and Conversation models."""

    def test_messages_are_immutable(self):
        """Test that a stored message cannot be edited."""
        message = user("m1", "hi")

        with pytest.raises(ValidationError):
            message.content = "changed"  # type: ignore

    def test_retry_source_only_on_errors(self):
        """Test that non-error messages reject retry_source."""
        with pytest.raises(ValidationError):
            user("m1", "hi", retry_source="hi")

    def test_error_message_is_retryable(self):
        """Test an error message carrying its source text."""
        message = Message(id="e1", role=MessageRole.ERROR, content="failed", retry_source="hi")

        assert message.is_retryable

    def test_conversation_defaults(self):
        """Test a new conversation."""
        conversation = Conversation(id="c1")

        assert conversation.title == DEFAULT_TITLE
        assert conversation.messages == ()
        assert conversation.last_message is None

    def test_get_message(self):
        """Test message lookup by id."""
        conversation = Conversation(id="c1", messages=(user("m1", "a"), user("m2", "b")))

        assert conversation.get_message("m2").content == "b"
        assert conversation.get_message("missing") is None


class TestSampleDataset:
    """Tests for the fixed sample conversations."""

    def test_three_samples_in_order(self):
        """Test sample ids and titles."""
        samples = build_sample_conversations(BASE_TIME)

        assert [c.id for c in samples] == ["sample-1", "sample-2", "sample-3"]
        assert [c.title for c in samples] == [
            "What can you help me with?",
            "Explain quantum computing",
            "Tell me a joke",
        ]

    def test_each_sample_is_question_and_answer(self):
        """Test sample message roles and ordering."""
        for conversation in build_sample_conversations(BASE_TIME):
            question, answer = conversation.messages
            assert question.role == MessageRole.USER
            assert answer.role == MessageRole.ASSISTANT
            assert answer.timestamp > question.timestamp

    def test_timestamps_relative_to_reference(self):
        """Test that sample times are offsets from the reference time."""
        samples = build_sample_conversations(BASE_TIME)

        assert samples[0].created_at == BASE_TIME - timedelta(seconds=300)
        assert samples[1].created_at == BASE_TIME - timedelta(seconds=600)
        assert samples[2].created_at == BASE_TIME - timedelta(seconds=120)


class TestStoreBasics:
    """Tests for live conversation management."""

    def test_empty_store(self, store: ConversationStore):
        """Test the initial state."""
        assert store.conversations == ()
        assert store.active_conversation_id is None
        assert store.active_conversation() is None
        assert not store.using_sample_view

    def test_create_inserts_at_front_and_activates(self, store: ConversationStore):
        """Test that new conversations are most-recent-first."""
        first = store.create_conversation()
        second = store.create_conversation()

        assert [c.id for c in store.conversations] == [second, first]
        assert store.active_conversation_id == second
        assert store.get_conversation(second).title == DEFAULT_TITLE

    def test_select_visible_conversation(self, store: ConversationStore):
        """Test selecting an existing conversation."""
        first = store.create_conversation()
        store.create_conversation()

        assert store.select_conversation(first)
        assert store.active_conversation_id == first

    def test_select_unknown_is_noop(self, store: ConversationStore):
        """Test selecting an id that does not exist."""
        current = store.create_conversation()

        assert not store.select_conversation("nope")
        assert store.active_conversation_id == current

    def test_delete_active_clears_selection(self, store: ConversationStore):
        """Test that deleting the active conversation selects nothing."""
        keep = store.create_conversation()
        doomed = store.create_conversation()

        assert store.delete_conversation(doomed)
        assert [c.id for c in store.conversations] == [keep]
        assert store.active_conversation_id is None

    def test_delete_inactive_keeps_selection(self, store: ConversationStore):
        """Test that deleting another conversation leaves the selection alone."""
        doomed = store.create_conversation()
        active = store.create_conversation()

        assert store.delete_conversation(doomed)
        assert store.active_conversation_id == active

    def test_delete_unknown_is_noop(self, store: ConversationStore):
        """Test deleting an id that does not exist."""
        store.create_conversation()

        assert not store.delete_conversation("nope")
        assert len(store.conversations) == 1


class TestAppendMessage:
    """Tests for appending messages."""

    def test_first_user_message_sets_title(self, store: ConversationStore):
        """Test that the first user message names the conversation."""
        conv_id = store.create_conversation()

        store.append_message(conv_id, user("m1", "What is the weather like on Mars today?"))

        title = store.get_conversation(conv_id).title
        assert title == "What is the weather like on Mars" + ELLIPSIS

    def test_later_messages_keep_title(self, store: ConversationStore):
        """Test that only the first message sets the title."""
        conv_id = store.create_conversation()
        store.append_message(conv_id, user("m1", "first"))
        store.append_message(conv_id, user("m2", "second"))

        assert store.get_conversation(conv_id).title == "first"

    def test_first_non_user_message_keeps_default_title(self, store: ConversationStore):
        """Test that an assistant opener does not rename the conversation."""
        conv_id = store.create_conversation()
        store.append_message(conv_id, Message(id="a1", role=MessageRole.ASSISTANT, content="hello"))

        assert store.get_conversation(conv_id).title == DEFAULT_TITLE

    def test_messages_keep_append_order(self, store: ConversationStore):
        """Test the append-only log order."""
        conv_id = store.create_conversation()
        for index in range(5):
            store.append_message(conv_id, user(f"m{index}", str(index)))

        contents = [m.content for m in store.get_conversation(conv_id).messages]
        assert contents == ["0", "1", "2", "3", "4"]

    def test_timestamps_never_go_backwards(self, store: ConversationStore):
        """Test that an older timestamp is clamped to the previous message's."""
        conv_id = store.create_conversation()
        store.append_message(conv_id, user("m1", "a", timestamp=BASE_TIME))
        stored = store.append_message(conv_id, user("m2", "b", timestamp=BASE_TIME - timedelta(hours=1)))

        assert stored.timestamp == BASE_TIME

    def test_append_to_unknown_conversation(self, store: ConversationStore):
        """Test that appending to a missing conversation is ignored."""
        assert store.append_message("nope", user("m1", "hi")) is None

    def test_append_does_not_touch_other_conversations(self, store: ConversationStore):
        """Test isolation between conversations."""
        other = store.create_conversation()
        target = store.create_conversation()

        store.append_message(target, user("m1", "hi"))

        assert store.get_conversation(other).messages == ()


class TestSampleOverlay:
    """Tests for the sample/live data switch."""

    def test_enable_on_empty_store_shows_samples(self, store: ConversationStore):
        """Test that samples are substituted when there are no live conversations."""
        store.enable_sample_view()

        assert store.is_showing_sample
        assert [c.id for c in store.visible_conversations()] == ["sample-1", "sample-2", "sample-3"]
        assert store.active_conversation_id == "sample-1"
        assert store.active_conversation().title == "What can you help me with?"

    def test_samples_are_selectable(self, store: ConversationStore):
        """Test browsing the sample dataset."""
        store.enable_sample_view()

        assert store.select_conversation("sample-3")
        assert store.active_conversation().id == "sample-3"

    def test_enable_with_live_data_keeps_live(self, store: ConversationStore):
        """Test that live conversations win over the sample view."""
        live = store.create_conversation()

        store.enable_sample_view()

        assert store.using_sample_view
        assert not store.is_showing_sample
        assert [c.id for c in store.visible_conversations()] == [live]
        assert store.active_conversation_id == live

    def test_samples_cannot_be_modified(self, store: ConversationStore):
        """Test that writes never reach the sample dataset."""
        store.enable_sample_view()

        assert store.append_message("sample-1", user("m9", "hi")) is None
        assert not store.delete_conversation("sample-1")
        assert len(store.get_conversation("sample-1").messages) == 2

    def test_create_materializes_live_conversation(self, store: ConversationStore):
        """Test that creating a conversation leaves the sample view."""
        store.enable_sample_view()

        conv_id = store.create_conversation()

        assert not store.is_showing_sample
        assert not store.using_sample_view
        assert [c.id for c in store.visible_conversations()] == [conv_id]
        assert store.active_conversation_id == conv_id

    def test_disable_selects_newest_live(self, store: ConversationStore):
        """Test that turning samples off selects the newest live conversation."""
        store.create_conversation()
        newest = store.create_conversation()
        store.enable_sample_view()
        store.select_conversation(store.conversations[1].id)

        store.disable_sample_view()

        assert store.active_conversation_id == newest

    def test_disable_on_empty_store_selects_nothing(self, store: ConversationStore):
        """Test turning samples off with no live data."""
        store.enable_sample_view()

        store.disable_sample_view()

        assert store.active_conversation_id is None
        assert store.visible_conversations() == []

    def test_active_id_always_visible(self, store: ConversationStore):
        """Test that the active id resolves in the visible collection across toggles."""
        store.enable_sample_view()
        store.disable_sample_view()
        store.create_conversation()
        store.enable_sample_view()
        store.disable_sample_view()

        active = store.active_conversation_id
        assert active is None or store.get_conversation(active) is not None

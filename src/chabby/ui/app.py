"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to the ChatSession.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Header, OptionList, Switch

from ..conversation import DEFAULT_TITLE, MessageRole
from ..session import ChatSession
from .config import APP_NAME, LogLevel
from .formatting import format_time
from .screens import ConfirmDeleteScreen
from .styles import APP_CSS
from .widgets import (
    AgentStatus,
    ChatHistoryWidget,
    ChatInputBar,
    ConversationList,
    DebugPanel,
    RetryButton,
    SampleToggle,
    SuggestedPromptButton,
)


class ChatApp(App):
    """Textual TUI for chatting with the agent."""

    CSS = APP_CSS
    TITLE = APP_NAME

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_chat", "New Chat"),
        Binding("ctrl+x", "delete_chat", "Delete"),
        Binding("ctrl+t", "toggle_sample", "Sample Data"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="sidebar"):
            yield ConversationList(id="conversation-list")
            yield AgentStatus(id="agent-status")
            yield SampleToggle(id="sample-toggle-bar")

        with Vertical(id="main-panel"):
            yield ChatHistoryWidget(id="chat-history")
            yield DebugPanel(id="debug-panel")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    def on_mount(self) -> None:
        self.theme = "catppuccin-mocha"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._route_debug)
        self._session.set_update_callback(self.refresh_view)
        log_panel.info("TUI", f"Agent backend: {self._session.client.backend_type}")

        self.refresh_view()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route session and backend diagnostics to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(component, message, LogLevel.from_string(level))

    def refresh_view(self) -> None:
        """Re-render everything that depends on session state."""
        session = self._session
        store = session.store
        active = store.active_conversation()

        self.query_one("#conversation-list", ConversationList).show(
            store.visible_conversations(), store.active_conversation_id
        )
        self.query_one("#chat-history", ChatHistoryWidget).show_conversation(active, session.is_sending)
        self.query_one("#agent-status", AgentStatus).set_active(session.active_agent_id is not None)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        if session.is_sending:
            input_bar.text = session.draft
        input_bar.set_enabled(not session.is_sending)

        switch = self.query_one(SampleToggle).switch
        if switch.value != store.using_sample_view:
            with self.prevent(Switch.Changed):
                switch.value = store.using_sample_view

        if active is None:
            self.sub_title = DEFAULT_TITLE
        elif active.last_message is not None:
            self.sub_title = f"{active.title} · {format_time(active.last_message.timestamp)}"
        else:
            self.sub_title = f"{active.title} · {format_time(active.created_at)}"

    def _send(self, text: str, retry: bool = False) -> None:
        if self._session.is_sending:
            self.notify("Please wait for the current reply", severity="warning", timeout=2)
            return
        self._session.draft = text
        self._run_send(text, retry)

    @work(group="send")
    async def _run_send(self, text: str, retry: bool) -> None:
        """Run one send as a background async worker.

        Not exclusive: an exclusive worker would cancel an in-flight call,
        and sends are never cancelled once dispatched.
        """
        if retry:
            reply = await self._session.retry(text)
        else:
            reply = await self._session.submit(text)

        if reply is not None and reply.role == MessageRole.ERROR:
            self.notify(reply.content[:60], severity="error", timeout=5)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._send(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, RetryButton):
            event.stop()
            self._send(event.button.retry_source, retry=True)
        elif isinstance(event.button, SuggestedPromptButton):
            event.stop()
            self._send(event.button.prompt)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is not None and self._session.store.select_conversation(event.option.id):
            self.refresh_view()

    def on_switch_changed(self, event: Switch.Changed) -> None:
        store = self._session.store
        if event.value:
            store.enable_sample_view()
        else:
            store.disable_sample_view()
        self.refresh_view()

    def action_new_chat(self) -> None:
        """Start a new conversation."""
        self._session.new_chat()
        self.query_one("#chat-input-bar", ChatInputBar).text = ""

    def action_delete_chat(self) -> None:
        """Ask for confirmation, then delete the active conversation."""
        store = self._session.store
        if store.is_showing_sample:
            self.notify("Sample conversations cannot be deleted", severity="warning", timeout=3)
            return
        active = store.active_conversation()
        if active is None:
            self.notify("No conversation selected", severity="warning", timeout=2)
            return

        def _on_confirm(confirmed: bool | None) -> None:
            if confirmed and store.delete_conversation(active.id):
                self.notify("Conversation deleted", timeout=2)
                self.refresh_view()

        self.push_screen(ConfirmDeleteScreen(active.title), _on_confirm)

    def action_toggle_sample(self) -> None:
        """Flip the sample data switch."""
        switch = self.query_one(SampleToggle).switch
        switch.value = not switch.value

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session driving the UI
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(Exception):
            await session.close()

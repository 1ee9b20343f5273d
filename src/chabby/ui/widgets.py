"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Conversation list rendering and selection
- Chat message rendering (markup, error bubbles, retry buttons)
- Agent status and sample view toggle
- Log rendering and scrolling
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Label, OptionList, RichLog, Static, Switch, TextArea
from textual.widgets.option_list import Option

from ..conversation import Conversation, MessageRole
from ..conversation import Message as ChatMessage
from .config import (
    AGENT_DISPLAY_NAME,
    APP_NAME,
    INPUT_HISTORY_MAX_SIZE,
    LOG_TIMESTAMP_FORMAT,
    SUGGESTED_PROMPTS,
    WELCOME_TEXT,
    LogLevel,
)
from .formatting import format_time, render_markup


def _copy_text(widget: Widget, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        _copy_text(self, self._content, "Message")


class RetryButton(Button):
    """Button attached to an error message that resubmits the failed text."""

    def __init__(self, retry_source: str, *args, **kwargs) -> None:
        super().__init__("Retry", *args, variant="warning", classes="retry-btn", **kwargs)
        self.retry_source = retry_source


class SuggestedPromptButton(Button):
    """Welcome screen button that submits a canned prompt."""

    def __init__(self, prompt: str, *args, **kwargs) -> None:
        super().__init__(prompt, *args, classes="suggested-prompt", **kwargs)
        self.prompt = prompt


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.focus()
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: terminals do not pass modifiers with Enter, so ctrl+j submits
        and plain Enter inserts a newline.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text
        if not value.strip():
            return
        if not self._history or self._history[-1] != value.strip():
            self._history.append(value.strip())
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self.post_message(self.Submitted(value))

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    @text.setter
    def text(self, value: str) -> None:
        self.query_one("#chat-input", TextArea).text = value

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable input while a send is in flight."""
        self.query_one("#chat-input", TextArea).disabled = not enabled
        self.query_one("#send-btn", Button).disabled = not enabled
        if enabled:
            self.focus_input()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class ConversationList(OptionList):
    """Sidebar list of visible conversations, newest first."""

    BORDER_TITLE = "Conversations"

    def show(self, conversations: list[Conversation], active_id: str | None) -> None:
        """Replace the listed conversations and highlight the active one."""
        self.clear_options()
        self.add_options([
            Option(Text(conversation.title, no_wrap=True, overflow="ellipsis"), id=conversation.id)
            for conversation in conversations
        ])
        self.border_subtitle = f"{len(conversations)}" if conversations else "No conversations yet"
        if active_id is not None:
            for index, conversation in enumerate(conversations):
                if conversation.id == active_id:
                    self.highlighted = index
                    break


class AgentStatus(Static):
    """Shows which agent powers the chat and whether it is working."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._active = False

    def on_mount(self) -> None:
        self._update_display()

    def set_active(self, active: bool) -> None:
        self._active = active
        self.set_class(active, "-active")
        self._update_display()

    def _update_display(self) -> None:
        dot = "[green]●[/]" if self._active else "[dim]●[/]"
        badge = "[bold green]Active[/]" if self._active else "[dim]Ready[/]"
        self.update(f"[dim]Powered by[/]\n{dot} {AGENT_DISPLAY_NAME}  {badge}")


class SampleToggle(Horizontal):
    """Label and switch for the sample data view."""

    def compose(self):
        yield Label("Sample Data", id="sample-label")
        yield Switch(value=False, id="sample-switch")

    @property
    def switch(self) -> Switch:
        return self.query_one("#sample-switch", Switch)


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from the session and agent backend.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Store": "bright_green",
        "Agent": "magenta",
        "HTTP": "blue",
        "LLM": "bright_magenta",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=False,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Session, Agent, HTTP, ...)
            message: Log message, written as plain text
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        line.append(" ")
        line.append(f"{LogLevel.name(level):<7}", style=self.LEVEL_COLORS.get(level, "white"))
        line.append(f"[{component}] ", style=self.COMPONENT_COLORS.get(component, "white"))
        line.append(message)
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        _copy_text(self, text, "Log")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable view of the active conversation.

    Shows a welcome panel with suggested prompts when there is nothing to show.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "New Conversation"
    ALLOW_MAXIMIZE = True
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._conversation: Conversation | None = None

    def show_conversation(self, conversation: Conversation | None, is_sending: bool = False) -> None:
        """Re-render the history for a conversation."""
        self._conversation = conversation
        self.remove_children()

        if conversation is None or not conversation.messages:
            self.border_subtitle = conversation.title if conversation else "New Conversation"
            self.mount(self._welcome_panel())
            return

        self.border_subtitle = f"{conversation.title} · {len(conversation.messages)} messages"
        self.mount_all([self._render_message(message) for message in conversation.messages])
        if is_sending:
            self.mount(Static("Assistant is typing…", classes="typing-indicator"))
        self.call_after_refresh(self.scroll_end, animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response of the shown conversation."""
        if self._conversation is None:
            return None
        for message in reversed(self._conversation.messages):
            if message.role == MessageRole.ASSISTANT:
                return message.content
        return None

    def _welcome_panel(self) -> Vertical:
        panel = Vertical(classes="welcome-panel")
        panel.compose_add_child(Static(APP_NAME, classes="welcome-title"))
        panel.compose_add_child(Static(WELCOME_TEXT, classes="welcome-text"))
        for prompt in SUGGESTED_PROMPTS:
            panel.compose_add_child(SuggestedPromptButton(prompt))
        return panel

    def _render_message(self, message: ChatMessage) -> ClickableMessage:
        """Build the widget tree for one message."""
        if message.role == MessageRole.USER:
            prefix, icon, border_class = "You", ">", "user-message"
            body = Text(message.content, overflow="fold")
        elif message.role == MessageRole.ERROR:
            prefix, icon, border_class = "Error", "!", "error-message"
            body = Text(message.content, overflow="fold")
        else:
            prefix, icon, border_class = "Assistant", "<", "assistant-message"
            body = render_markup(message.content)

        container = ClickableMessage(content=message.content, classes=f"chat-message {border_class}")
        container.compose_add_child(
            Static(f"{icon} {prefix} [{format_time(message.timestamp)}]", classes="message-header", markup=False)
        )
        container.compose_add_child(Static(body, classes="message-content"))
        if message.retry_source is not None:
            container.compose_add_child(RetryButton(message.retry_source))
        return container

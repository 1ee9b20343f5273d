"""Modal screens for the TUI.

This module hides the design decisions about:
- Confirmation dialog appearance (CSS, layout)
- Keyboard shortcuts for dialogs

To change how confirmations look, modify only this file.
"""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Modal dialog asking whether to delete a conversation.

    Dismisses with True when the user confirms, False otherwise.
    """

    CSS = """
    ConfirmDeleteScreen {
        align: center middle;
        background: $background 70%;
    }

    #confirm-dialog {
        width: 60;
        height: auto;
        max-height: 16;
        border: tall $error;
        background: $surface;
        padding: 1 2;
    }

    #confirm-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $error;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #confirm-prompt {
        width: 100%;
        text-align: center;
        padding: 1 2;
        background: $panel;
        border: round $border;
        margin-bottom: 1;
    }

    #confirm-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #confirm-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, conversation_title: str) -> None:
        super().__init__()
        self._conversation_title = conversation_title

    def compose(self) -> ComposeResult:
        prompt = Text("Delete ")
        prompt.append(f'"{self._conversation_title}"', style="bold")
        prompt.append("? This cannot be undone.")
        with Vertical(id="confirm-dialog"):
            yield Static("Delete Conversation", id="confirm-title")
            yield Static(prompt, id="confirm-prompt")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", id="btn-yes", variant="error")
                yield Button("Cancel", id="btn-no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "btn-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

"""Terminal UI module for chabby.

Provides a Textual-based TUI for chatting with the agent.

Module structure (each module hides a design decision):
- config.py: Constants (log levels, prompts, formats)
- formatting.py: Markup blocks to Rich text
- widgets.py: Custom widgets (conversation list, chat history, input, log)
- styles.py: CSS styling (layout decisions)
- screens.py: Modal dialogs (delete confirmation)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .config import LogLevel
from .formatting import blocks_to_text, render_markup
from .widgets import ChatHistoryWidget, ChatInputBar, ConversationList, DebugPanel

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConversationList",
    "DebugPanel",
    "LogLevel",
    "blocks_to_text",
    "render_markup",
    "run_chat_tui",
]

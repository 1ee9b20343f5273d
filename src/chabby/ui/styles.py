"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: a fixed-width sidebar (conversations, agent status, sample toggle)
beside the chat column (history, optional log panel, input bar).
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 1;
    grid-columns: 34 1fr;
    background: $background;
}

/* ============================================
   Sidebar
   ============================================ */
#sidebar {
    height: 100%;
    background: $panel;
    border-right: solid $border;
}

#conversation-list {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;

    &:focus {
        border: round $primary;
    }

    & > .option-list--option-highlighted {
        background: $primary 20%;
        text-style: bold;
    }
}

#agent-status {
    height: auto;
    padding: 1 2;
    border-top: solid $border;
    color: $foreground;

    &.-active {
        color: $success;
    }
}

#sample-toggle-bar {
    height: auto;
    padding: 0 1;
    border-top: solid $border;
    align: left middle;
}

#sample-label {
    width: 1fr;
    padding: 1 1;
    color: $text-muted;
}

/* ============================================
   Chat Column
   ============================================ */
#main-panel {
    height: 100%;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $secondary;
    }
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:disabled {
        opacity: 50%;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    text-style: bold;
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }
}

.error-message {
    border-left: tall $error;
    background: $error 10%;

    & .message-header {
        color: $error;
    }

    & .message-content {
        color: $error;
    }
}

.message-header {
    height: auto;
    text-style: bold;
}

.message-content {
    height: auto;
    color: $foreground;
}

.retry-btn {
    margin-top: 1;
    min-width: 10;
}

.typing-indicator {
    height: auto;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Welcome Panel
   ============================================ */
.welcome-panel {
    height: auto;
    padding: 2 4;
    align: center top;
}

.welcome-title {
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $primary;
    margin-bottom: 1;
}

.welcome-text {
    width: 100%;
    text-align: center;
    color: $text-muted;
    margin-bottom: 1;
}

.suggested-prompt {
    width: 100%;
    margin: 0 0 1 0;
}

/* ============================================
   Header / Footer
   ============================================ */
Header {
    background: $panel;
    dock: top;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}
"""

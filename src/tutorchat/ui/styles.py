"""CSS styles for the TUI.

Single column, top to bottom: header, transcript, typing indicator,
error toast, log panel, input bar, footer. Colors come from the active
theme variables only.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Transcript */
#chat-history {
    height: 1fr;
    min-height: 8;
    padding: 0 1;
    background: $surface;
    border: round $primary 50%;
    border-title-color: $primary;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;
}

#chat-history:focus-within {
    border: round $primary;
}

.empty-placeholder {
    width: 1fr;
    margin: 2 0 0 0;
    content-align: center middle;
    color: $text-muted;
    text-style: italic;
}

.chat-message {
    width: 80%;
    height: auto;
    padding: 0 1;
    margin-bottom: 1;
}

.user-message {
    offset-x: 25%;
    background: $primary 8%;
    border-right: outer $primary;
}

.bot-message {
    background: $boost;
    border-left: outer $secondary;
}

.message-header {
    text-style: bold;
    color: $text-muted;
}

.user-message > .message-header {
    color: $primary;
}

.bot-message > .message-header {
    color: $secondary;
}

/* Status lines */
#typing-indicator {
    height: 1;
    padding-left: 2;
    color: $secondary;
    text-style: italic;
}

#error-toast {
    height: 3;
    margin: 0 2;
    background: $error 85%;
    color: $text;
}

#error-text {
    width: 1fr;
    padding: 1 2;
}

#dismiss-error-btn {
    min-width: 5;
    width: 5;
    border: none;
}

/* Log panel, hidden unless a log level is given */
#debug-panel {
    height: 10;
    padding: 0 1;
    background: $panel;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}

/* Input */
ChatInputBar {
    height: auto;
    padding: 1 1 0 1;
    background: $panel;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
    margin-left: 1;
}

#clear-btn {
    min-width: 14;
    margin-left: 1;
}

Footer {
    background: $panel;
}
"""

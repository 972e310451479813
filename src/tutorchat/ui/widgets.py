"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Transcript rendering and scrolling
- Typing indicator and error toast visibility
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..conversation import ConversationState, Message, Sender
from .config import (
    EMPTY_TRANSCRIPT_TEXT,
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_TIMESTAMP_FORMAT,
    TYPING_INDICATOR_TEXT,
    LogLevel,
)
from .formatting import format_header, render_message_text


class ClickableMessage(Vertical):
    """A transcript entry that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        """Copy message text to the clipboard (OSC 52)."""
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    BINDINGS = [
        Binding("up", "history_previous", "Previous", show=False),
        Binding("down", "history_next", "Next", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        """Handle paste events - convert newlines to spaces for single-line input."""
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def action_history_previous(self) -> None:
        """Step back to the previous sent message."""
        if not self._history:
            return
        if self._history_index == -1:
            self._current_input = self.value
            self._history_index = len(self._history) - 1
        elif self._history_index > 0:
            self._history_index -= 1
        self.value = self._history[self._history_index]
        self.cursor_position = len(self.value)

    def action_history_next(self) -> None:
        """Step forward, ending at the text typed before browsing."""
        if self._history_index == -1:
            return
        if self._history_index < len(self._history) - 1:
            self._history_index += 1
            self.value = self._history[self._history_index]
        else:
            self._history_index = -1
            self.value = self._current_input
        self.cursor_position = len(self.value)

    def add_to_history(self, command: str) -> None:
        """Add a sent message to history."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Message input with Send and Clear Chat buttons.

    Enter or the Send button posts ``Submitted`` with the raw text. Whether
    the text is actually sent is decided by the app. Clear Chat posts
    ``ClearRequested``.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class ClearRequested(TextualMessage):
        """Message sent when the user asks to clear the chat."""

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success", disabled=True).with_tooltip(
            "Send message (Enter)"
        )
        yield Button("Clear Chat", id="clear-btn", variant="warning").with_tooltip(
            "Clear the conversation (Ctrl+K)"
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.value))
        elif event.button.id == "clear-btn":
            event.stop()
            self.post_message(self.ClearRequested())

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", HistoryInput).value

    def accept(self) -> None:
        """Record the current text in history and clear the input."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.add_to_history(text_input.value.strip())
        text_input.value = ""

    def set_send_enabled(self, enabled: bool) -> None:
        self.query_one("#send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class TypingIndicator(Static):
    """Shown while a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(TYPING_INDICATOR_TEXT, *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False


class ErrorToast(Horizontal):
    """Dismissible banner showing the last surfaced error."""

    class Dismissed(TextualMessage):
        """Message sent when the user closes the toast."""

    def compose(self):
        yield Static("", id="error-text")
        yield Button("×", id="dismiss-error-btn", variant="error").with_tooltip(
            "Close error message (Esc)"
        )

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, error: str | None) -> None:
        """Show ``error``, or hide the toast when it is None."""
        if error is None:
            self.display = False
            return
        self.query_one("#error-text", Static).update(Text(error))
        self.display = True

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "dismiss-error-btn":
            event.stop()
            self.post_message(self.Dismissed())


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    DEFAULT_CSS = """
    DebugPanel {
        display: none;
    }
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    _LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Dispatch": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
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

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Session, Dispatch)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._LEVEL_COLORS.get(level, "white")
        comp_color = self._COMPONENT_COLORS.get(component, "white")

        line = Text.from_markup(
            f"[dim]{timestamp}[/] [{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

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


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript view.

    Renders whatever snapshot it is given. Because the transcript only grows
    between resets, new snapshots are rendered incrementally.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: tuple[Message, ...] = ()
        self._placeholder_shown = False

    def on_mount(self) -> None:
        self._show_placeholder()

    def render_state(self, state: ConversationState) -> None:
        """Bring the view in line with ``state.transcript``."""
        transcript = state.transcript
        if transcript == self._rendered:
            return

        count = len(self._rendered)
        if transcript[:count] == self._rendered:
            new_messages = transcript[count:]
        else:
            self.remove_children()
            self._placeholder_shown = False
            new_messages = transcript

        self._rendered = transcript

        if not transcript:
            self._show_placeholder()
            self.border_subtitle = "Conversation history"
            return

        if self._placeholder_shown:
            self.query(".empty-placeholder").remove()
            self._placeholder_shown = False

        for message in new_messages:
            self.mount(self._build_message(message))

        self.border_subtitle = f"{len(transcript)} messages"
        self.call_after_refresh(self.scroll_end, animate=False)

    def get_last_response(self) -> str | None:
        """Get the last tutor message."""
        for message in reversed(self._rendered):
            if message.sender == Sender.BOT:
                return message.text
        return None

    def _show_placeholder(self) -> None:
        if not self._placeholder_shown:
            self.mount(Static(EMPTY_TRANSCRIPT_TEXT, classes="empty-placeholder"))
            self._placeholder_shown = True

    def _build_message(self, message: Message) -> ClickableMessage:
        sender_class = "user-message" if message.sender == Sender.USER else "bot-message"
        container = ClickableMessage(content=message.text, classes=f"chat-message {sender_class}")
        container.compose_add_child(Static(format_header(message), classes="message-header"))
        container.compose_add_child(Static(render_message_text(message), classes="message-content"))
        return container

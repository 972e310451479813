"""Main Textual TUI application.

Renders the conversation state and turns user actions into session calls.
The app never mutates the conversation itself; it re-renders whenever the
store reports a new snapshot.
"""

import asyncio
from collections.abc import Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from ..conversation import ConversationState
from ..session import ConversationSession
from .config import LogLevel
from .screens import ConfirmClearScreen
from .styles import APP_CSS
from .themes import CLASSROOM_LIGHT
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ErrorToast,
    TypingIndicator,
)


class TutorChatApp(App):
    """Textual TUI for chatting with the tutor."""

    CSS = APP_CSS
    TITLE = "Tutor Chat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("escape", "dismiss_error", "Close Error"),
        Binding("ctrl+r", "copy_last_response", "Copy Reply"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        session: ConversationSession,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._unsubscribe: Callable[[], None] | None = None
        self._history: ChatHistoryWidget | None = None
        self._indicator: TypingIndicator | None = None
        self._toast: ErrorToast | None = None
        self._log_panel: DebugPanel | None = None
        self._input_bar: ChatInputBar | None = None

    @property
    def session(self) -> ConversationSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield TypingIndicator(id="typing-indicator")
        yield ErrorToast(id="error-toast")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(CLASSROOM_LIGHT)
        self.theme = "classroom-light"

        # Default-screen widgets, also rendered while a modal is open
        self._history = self.query_one("#chat-history", ChatHistoryWidget)
        self._indicator = self.query_one("#typing-indicator", TypingIndicator)
        self._toast = self.query_one("#error-toast", ErrorToast)
        self._log_panel = self.query_one("#debug-panel", DebugPanel)
        self._input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        log_panel = self._log_panel
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._route_log)
        self._unsubscribe = self._session.subscribe(self._on_state_changed)

        self.sub_title = f"{self._session.gateway.gateway_type} gateway"
        self._on_state_changed(self._session.state)
        self._input_bar.focus_input()

    def on_unmount(self) -> None:
        """Detach from the session; the caller owns the gateway."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session.set_debug_callback(None)

    def _route_log(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        if self._log_panel is not None:
            self._log_panel.add_entry(component, message, LogLevel.from_string(level))

    def _on_state_changed(self, state: ConversationState) -> None:
        """Re-render every view that depends on the conversation state."""
        if self._unsubscribe is None:
            return
        self._history.render_state(state)
        self._indicator.display = state.pending
        self._toast.show_error(state.last_error)
        self._refresh_send_button()

    def _refresh_send_button(self) -> None:
        if self._input_bar is not None:
            self._input_bar.set_send_enabled(self._session.can_send(self._input_bar.value))

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_send_button()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not self._session.can_send(event.value):
            return
        self._input_bar.accept()
        self._send(event.value)

    @work(group="dispatch")
    async def _send(self, text: str) -> None:
        """Run one dispatch as a background async worker."""
        await self._session.send(text)

    def on_chat_input_bar_clear_requested(self, event: ChatInputBar.ClearRequested) -> None:
        self.action_clear_chat()

    def on_error_toast_dismissed(self, event: ErrorToast.Dismissed) -> None:
        self._session.dismiss_error()

    def action_dismiss_error(self) -> None:
        """Close the error toast. The transcript keeps the failure message."""
        if self._session.state.last_error is not None:
            self._session.dismiss_error()

    def action_clear_chat(self) -> None:
        """Clear the chat, asking first if a reply is still pending."""
        if isinstance(self.screen, ConfirmClearScreen):
            return
        if self._session.state.pending:
            self.push_screen(ConfirmClearScreen(), self._on_clear_confirmed)
            return
        self._clear()

    def _on_clear_confirmed(self, confirmed: bool | None) -> None:
        if confirmed:
            self._clear()

    def _clear(self) -> None:
        self._session.reset()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self._log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last tutor reply to clipboard."""
        response = self._history.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Reply copied")
        else:
            self.notify("No reply to copy", severity="warning")


async def run_tutor_tui(
    session: ConversationSession,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        session: Conversation session to drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = TutorChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass

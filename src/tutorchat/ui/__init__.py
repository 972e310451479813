"""Terminal UI module for tutorchat.

Provides a Textual-based TUI that renders a ConversationSession.

Module structure (each module hides a design decision):
- config.py: Display strings and log levels
- formatting.py: Labels and timestamp text
- widgets.py: Custom widgets (transcript, input bar, toast, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (clear-chat confirmation)
- app.py: Application orchestration (user interaction flow)
"""

from .app import TutorChatApp, run_tutor_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorToast, TypingIndicator

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "ErrorToast",
    "LogLevel",
    "TutorChatApp",
    "TypingIndicator",
    "run_tutor_tui",
]

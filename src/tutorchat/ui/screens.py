"""Modal screens for the TUI.

Only one dialog exists: the confirmation shown when the user clears the
chat while a reply is still pending.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmClearScreen(ModalScreen[bool]):
    """Asks before clearing the chat while a reply is still on its way.

    Dismisses with True to clear, False to keep the conversation.
    """

    CSS = """
    ConfirmClearScreen {
        align: center middle;
        background: $background 60%;
    }

    #clear-dialog {
        width: 56;
        height: auto;
        padding: 1 3;
        border: thick $warning;
        background: $panel;
    }

    #clear-title {
        width: 1fr;
        content-align: center middle;
        text-style: bold;
        color: $warning;
    }

    #clear-prompt {
        width: 1fr;
        margin: 1 0;
        text-align: center;
        color: $foreground;
    }

    #clear-buttons {
        height: 3;
        align-horizontal: center;
    }

    #clear-buttons > Button {
        min-width: 12;
        margin: 0 2;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    PROMPT = "The tutor is still answering. Clear the chat and discard that reply?"

    def compose(self) -> ComposeResult:
        with Vertical(id="clear-dialog"):
            yield Static("Clear Chat", id="clear-title")
            yield Static(self.PROMPT, id="clear-prompt")
            with Horizontal(id="clear-buttons"):
                yield Button("Clear", id="btn-yes", variant="error")
                yield Button("Keep", id="btn-no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

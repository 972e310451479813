"""Text formatting utilities for the TUI.

Hides how transcript entries are labelled and timestamped.
"""

from datetime import datetime

from rich.text import Text

from ..conversation import Message, Sender
from .config import BOT_LABEL, MESSAGE_TIMESTAMP_FORMAT, USER_LABEL


def format_timestamp(moment: datetime) -> str:
    """Format a message time as hours and minutes."""
    return moment.strftime(MESSAGE_TIMESTAMP_FORMAT)


def sender_label(sender: Sender) -> str:
    """Display name for a message author."""
    return USER_LABEL if sender == Sender.USER else BOT_LABEL


def format_header(message: Message) -> str:
    """Header line shown above a message: label and time."""
    icon = ">" if message.sender == Sender.USER else "<"
    return f"{icon} {sender_label(message.sender)} [{format_timestamp(message.created_at)}]"


def render_message_text(message: Message) -> Text:
    """Render message text verbatim, without markup parsing."""
    return Text(message.text)


def format_plain(message: Message) -> str:
    """One-line plain representation, used by the console commands."""
    return f"{sender_label(message.sender)} [{format_timestamp(message.created_at)}]: {message.text}"

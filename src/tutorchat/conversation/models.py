"""Data models for the conversation state.

These models define the transcript entries and the conversation snapshot,
independent of how the snapshot is held or rendered.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sender(str, Enum):
    """Who authored a transcript message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single transcript entry.

    Text is trimmed at creation and must not be empty afterwards.
    """

    model_config = ConfigDict(frozen=True)

    sender: Sender = Field(description="Author of the message: 'user' or 'bot'")
    text: str = Field(description="Trimmed message text")
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("text")
    @classmethod
    def _trim_text(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Message text must not be empty")
        return trimmed

    @classmethod
    def from_user(cls, text: str) -> "Message":
        """Create a user message stamped with the current time."""
        return cls(sender=Sender.USER, text=text)

    @classmethod
    def from_bot(cls, text: str) -> "Message":
        """Create a bot message stamped with the current time."""
        return cls(sender=Sender.BOT, text=text)


class ConversationState(BaseModel):
    """Immutable snapshot of a conversation.

    Every transition returns a new snapshot and leaves the receiver
    untouched, so a snapshot handed to a renderer never changes under it.
    """

    model_config = ConfigDict(frozen=True)

    transcript: tuple[Message, ...] = Field(default_factory=tuple)
    pending: bool = Field(default=False, description="True while a dispatch is in flight")
    last_error: str | None = Field(default=None, description="Most recently surfaced error")

    def with_message(self, message: Message) -> "ConversationState":
        """Return a snapshot with ``message`` appended to the transcript."""
        return self.model_copy(update={"transcript": (*self.transcript, message)})

    def with_pending(self, pending: bool) -> "ConversationState":
        """Return a snapshot with the in-flight flag set to ``pending``."""
        return self.model_copy(update={"pending": pending})

    def with_error(self, error: str | None) -> "ConversationState":
        """Return a snapshot with ``last_error`` set, or cleared when None."""
        return self.model_copy(update={"last_error": error})

    def cleared(self) -> "ConversationState":
        """Return an empty snapshot. The in-flight flag is preserved."""
        return self.model_copy(update={"transcript": (), "last_error": None})

    @property
    def is_empty(self) -> bool:
        return not self.transcript

    @property
    def last_message(self) -> Message | None:
        return self.transcript[-1] if self.transcript else None

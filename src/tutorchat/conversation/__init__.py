"""Conversation state module for tutorchat.

Holds the session transcript, the in-flight flag and the surfaced error.
"""

from .models import ConversationState, Message, Sender
from .store import ConversationStore, StateListener

__all__ = [
    "ConversationState",
    "ConversationStore",
    "Message",
    "Sender",
    "StateListener",
]

"""Conversation session protocol.

Single-flight dispatch of user messages to the tutor gateway.
"""

from .dispatch import (
    GATEWAY_ERROR_PREFIX,
    NO_REPLY_TEXT,
    TRANSPORT_FAILURE_TEXT,
    UNKNOWN_ERROR_TEXT,
    Classification,
    DebugCallback,
    classify_outcome,
    dispatch,
)
from .session import ConversationSession

__all__ = [
    "GATEWAY_ERROR_PREFIX",
    "NO_REPLY_TEXT",
    "TRANSPORT_FAILURE_TEXT",
    "UNKNOWN_ERROR_TEXT",
    "Classification",
    "ConversationSession",
    "DebugCallback",
    "classify_outcome",
    "dispatch",
]

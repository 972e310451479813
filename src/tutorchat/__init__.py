"""
tutorchat: a conversational client for a remote tutoring endpoint.

The core is the conversation session protocol: optimistic append of the
user's message, single-flight dispatch to the tutor gateway, and
classification of the outcome into the transcript. Presentation layers
(the Textual TUI and the console chat) only render the resulting state.
"""

__version__ = "0.1.0"

from .config import TutorChatConfig, load_config
from .conversation import ConversationState, ConversationStore, Message, Sender
from .gateway import (
    GatewayRejected,
    GatewayReply,
    HttpTutorGateway,
    TransportFailure,
    TutorGateway,
    create_tutor_gateway,
)
from .session import ConversationSession, classify_outcome, dispatch

__all__ = [
    "ConversationSession",
    "ConversationState",
    "ConversationStore",
    "GatewayRejected",
    "GatewayReply",
    "HttpTutorGateway",
    "Message",
    "Sender",
    "TransportFailure",
    "TutorChatConfig",
    "TutorGateway",
    "classify_outcome",
    "create_tutor_gateway",
    "dispatch",
    "load_config",
]

"""Dispatch protocol: one send-await-classify-append cycle.

Hides the ordering rules of a send:
- The user message is appended before any network activity
- Exactly one gateway call per accepted send
- The terminal bot message is appended before the in-flight flag is cleared
- The in-flight flag is cleared on every exit path
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..conversation import ConversationStore, Message
from ..gateway import (
    GatewayOutcome,
    GatewayRejected,
    GatewayReply,
    TransportFailure,
    TutorGateway,
)

DebugCallback = Callable[[str, str, str], None]

TRANSPORT_FAILURE_TEXT = "Failed to send message."
UNKNOWN_ERROR_TEXT = "Unknown error"
NO_REPLY_TEXT = "No response from the tutor."
GATEWAY_ERROR_PREFIX = "Error: "

_COMPONENT = "Dispatch"


@dataclass(frozen=True)
class Classification:
    """What a gateway outcome turns into.

    Attributes:
        bot_text: Text of the terminal bot message
        error: Value for last_error, or None to leave it untouched
    """

    bot_text: str
    error: str | None = None


def classify_outcome(outcome: GatewayOutcome) -> Classification:
    """Map a gateway outcome to the bot message and surfaced error.

    Args:
        outcome: Result of a single gateway call

    Returns:
        Classification for the outcome

    Raises:
        TypeError: If the outcome is not one of the known variants
    """
    if isinstance(outcome, GatewayReply):
        if outcome.reply and outcome.reply.strip():
            return Classification(bot_text=outcome.reply)
        return Classification(bot_text=NO_REPLY_TEXT)

    if isinstance(outcome, GatewayRejected):
        description = outcome.error if outcome.error and outcome.error.strip() else UNKNOWN_ERROR_TEXT
        return Classification(
            bot_text=f"{GATEWAY_ERROR_PREFIX}{description}",
            error=description,
        )

    if isinstance(outcome, TransportFailure):
        return Classification(bot_text=TRANSPORT_FAILURE_TEXT, error=TRANSPORT_FAILURE_TEXT)

    raise TypeError(f"Unknown gateway outcome: {type(outcome).__name__}")


async def dispatch(
    store: ConversationStore,
    gateway: TutorGateway,
    raw_text: str,
    debug: DebugCallback | None = None,
) -> bool:
    """Send one user message through the gateway and record the result.

    Args:
        store: Conversation store to mutate
        gateway: Tutor gateway to ask
        raw_text: Text as typed by the user
        debug: Optional callback(level, component, message) for tracing

    Returns:
        True if the send was accepted, False if it was ignored because the
        text was blank or another dispatch is still in flight
    """
    def _debug(level: str, message: str) -> None:
        if debug:
            debug(level, _COMPONENT, message)

    text = raw_text.strip()
    if not text:
        _debug("debug", "Ignoring empty message")
        return False

    if store.state.pending:
        _debug("warning", "Send ignored: a reply is already pending")
        return False

    generation = store.generation
    store.append(Message.from_user(text))
    store.set_pending(True)

    try:
        preview = text[:50] + ("..." if len(text) > 50 else "")
        _debug("info", f"Sending '{preview}' via {gateway.gateway_type} gateway")

        try:
            outcome = await gateway.ask(text)
        except Exception as e:
            _debug("error", f"Gateway raised {type(e).__name__}: {e}")
            outcome = TransportFailure(reason=str(e) or type(e).__name__)

        if store.generation != generation:
            _debug("warning", f"Discarding {outcome.kind} outcome: conversation was reset")
            return True

        if isinstance(outcome, TransportFailure):
            _debug("error", f"Transport failure: {outcome.reason}")
        elif isinstance(outcome, GatewayRejected):
            _debug("error", f"Gateway rejected request with status {outcome.status_code}")
        else:
            _debug("debug", "Gateway replied" if outcome.reply else "Gateway returned an empty reply")

        result = classify_outcome(outcome)
        if result.error is not None:
            store.set_error(result.error)
        store.append(Message.from_bot(result.bot_text))
        return True
    finally:
        store.set_pending(False)

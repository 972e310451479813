"""Conversation session facade.

Bundles a store and a gateway so presentation layers only deal with the
user actions: send, reset and dismiss-error.
"""

from collections.abc import Callable
from typing import Any

from ..conversation import ConversationState, ConversationStore, StateListener
from ..gateway import TutorGateway
from .dispatch import DebugCallback, dispatch


class ConversationSession:
    """One UI session talking to one tutor gateway.

    Example:
        async with ConversationSession(gateway) as session:
            session.subscribe(render)
            await session.send("How do I say thank you?")
    """

    def __init__(
        self,
        gateway: TutorGateway,
        store: ConversationStore | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store or ConversationStore()
        self._debug_callback: DebugCallback | None = None

    @property
    def gateway(self) -> TutorGateway:
        return self._gateway

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def state(self) -> ConversationState:
        """Current conversation snapshot."""
        return self._store.state

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    def can_send(self, raw_text: str) -> bool:
        """Whether a send of ``raw_text`` would be accepted right now."""
        return bool(raw_text.strip()) and not self._store.state.pending

    async def send(self, raw_text: str) -> bool:
        """Dispatch a user message. See ``dispatch`` for the full contract."""
        return await dispatch(self._store, self._gateway, raw_text, debug=self._debug_callback)

    def reset(self) -> None:
        """Clear the transcript and the surfaced error."""
        if self._store.state.pending:
            self._debug("warning", "Reset while a reply is pending; it will be discarded")
        self._store.reset()
        self._debug("info", "Conversation cleared")

    def dismiss_error(self) -> None:
        """Clear the surfaced error without touching the transcript."""
        self._store.set_error(None)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe function."""
        return self._store.subscribe(listener)

    async def close(self) -> None:
        """Release the gateway."""
        await self._gateway.close()

    async def __aenter__(self) -> "ConversationSession":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self._gateway.__aexit__(exc_type, exc_val, exc_tb)

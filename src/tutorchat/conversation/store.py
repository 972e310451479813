"""Mutable holder for the conversation state of one UI session.

The store hides:
- How the current snapshot is replaced on each transition
- The reset generation used to recognise stale dispatches
- Listener registration for reactive rendering

Data is lost when the application exits.
"""

from collections.abc import Callable

from .models import ConversationState, Message

StateListener = Callable[[ConversationState], None]


class ConversationStore:
    """Owns the current conversation snapshot for a session.

    Each mutation swaps in a new immutable snapshot and notifies every
    listener with it, in registration order.
    """

    def __init__(self, state: ConversationState | None = None):
        self._state = state or ConversationState()
        self._generation = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ConversationState:
        """Current conversation snapshot."""
        return self._state

    @property
    def generation(self) -> int:
        """Number of resets performed so far."""
        return self._generation

    def append(self, message: Message) -> None:
        """Add a message to the end of the transcript."""
        self._replace(self._state.with_message(message))

    def set_pending(self, pending: bool) -> None:
        """Set the in-flight flag."""
        self._replace(self._state.with_pending(pending))

    def set_error(self, error: str | None) -> None:
        """Set the surfaced error, or clear it with None."""
        self._replace(self._state.with_error(error))

    def reset(self) -> None:
        """Empty the transcript and clear the error.

        Does not touch the in-flight flag. Bumps the generation so that a
        dispatch started before the reset can tell its outcome is stale.
        """
        self._generation += 1
        self._replace(self._state.cleared())

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the new snapshot after every mutation.

        Args:
            listener: Callable receiving the new ConversationState

        Returns:
            Zero-argument function that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, state: ConversationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

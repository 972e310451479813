"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from tutorchat.conversation import ConversationStore
from tutorchat.gateway import GatewayOutcome, GatewayReply, TutorGateway
from tutorchat.session import ConversationSession


class ScriptedGateway(TutorGateway):
    """Gateway returning pre-set outcomes, optionally held until released.

    ``calls`` records every message asked, in order. When ``hold`` is True
    each call blocks until ``release()`` so tests can observe the in-flight
    state.
    """

    def __init__(self, *outcomes: GatewayOutcome | Exception, hold: bool = False):
        self._outcomes = list(outcomes)
        self._hold = hold
        self._released = asyncio.Event()
        self.started = asyncio.Event()
        self.calls: list[str] = []
        self.closed = False

    def release(self) -> None:
        self._released.set()

    async def ask(self, message: str) -> GatewayOutcome:
        self.calls.append(message)
        self.started.set()
        if self._hold:
            await self._released.wait()
        outcome = self._outcomes.pop(0) if self._outcomes else GatewayReply(reply="ok")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True

    @property
    def gateway_type(self) -> str:
        return "scripted"


@pytest.fixture
def store():
    """Return an empty conversation store."""
    return ConversationStore()


@pytest.fixture(scope="session")
def make_gateway():
    """Return a factory for scripted gateways."""
    return ScriptedGateway


@pytest.fixture
def make_session(store):
    """Return a factory building a session over the shared store."""
    def _make(*outcomes: GatewayOutcome | Exception, hold: bool = False) -> ConversationSession:
        return ConversationSession(ScriptedGateway(*outcomes, hold=hold), store=store)
    return _make

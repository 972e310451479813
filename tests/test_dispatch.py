"""Unit tests for the dispatch protocol and session facade."""
import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tutorchat.conversation import ConversationState, ConversationStore, Sender
from tutorchat.gateway import GatewayRejected, GatewayReply, TransportFailure
from tutorchat.session import (
    NO_REPLY_TEXT,
    TRANSPORT_FAILURE_TEXT,
    UNKNOWN_ERROR_TEXT,
    Classification,
    ConversationSession,
    classify_outcome,
    dispatch,
)


class TestClassifyOutcome:
    """Tests for outcome classification."""

    def test_reply(self):
        assert classify_outcome(GatewayReply(reply="Bonjour")) == Classification(bot_text="Bonjour")

    def test_missing_reply_uses_fallback(self):
        result = classify_outcome(GatewayReply())
        assert result.bot_text == NO_REPLY_TEXT
        assert result.error is None

    def test_blank_reply_uses_fallback(self):
        assert classify_outcome(GatewayReply(reply="   ")).bot_text == NO_REPLY_TEXT

    def test_rejected_with_description(self):
        result = classify_outcome(GatewayRejected(status_code=429, error="rate limited"))
        assert result.error == "rate limited"
        assert "rate limited" in result.bot_text

    def test_rejected_without_description(self):
        result = classify_outcome(GatewayRejected(status_code=500))
        assert result.error == UNKNOWN_ERROR_TEXT
        assert UNKNOWN_ERROR_TEXT in result.bot_text

    def test_transport_failure(self):
        result = classify_outcome(TransportFailure(reason="connection refused"))
        assert result.error == TRANSPORT_FAILURE_TEXT
        assert result.bot_text == TRANSPORT_FAILURE_TEXT

    def test_unknown_outcome_raises(self):
        with pytest.raises(TypeError, match="Unknown gateway outcome"):
            classify_outcome("not an outcome")  # type: ignore[arg-type]


class TestDispatch:
    """Tests for the send-await-classify-append cycle."""

    @given(text=st.text(alphabet=" \t\r\n"))
    def test_whitespace_input_is_ignored(self, make_gateway, text: str):
        """Property test: blank input changes nothing and issues no request."""
        store = ConversationStore()
        gateway = make_gateway()
        before = store.state

        accepted = asyncio.run(dispatch(store, gateway, text))

        assert accepted is False
        assert store.state == before
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_user_message_appended_before_request(self, store: ConversationStore, make_gateway):
        """Test that the trimmed user message is visible before the gateway is asked."""
        gateway = make_gateway(GatewayReply(reply="Bonjour"), hold=True)

        task = asyncio.create_task(dispatch(store, gateway, "  Hello tutor  "))
        await gateway.started.wait()

        assert len(store.state.transcript) == 1
        assert store.state.transcript[0].sender == Sender.USER
        assert store.state.transcript[0].text == "Hello tutor"
        assert store.state.pending is True
        assert gateway.calls == ["Hello tutor"]

        gateway.release()
        assert await task is True
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_optimistic_append_precedes_network(self, store: ConversationStore, make_gateway):
        """Test ordering: user message appended, then pending set, then request."""
        events: list[str] = []

        def listener(state: ConversationState) -> None:
            events.append(f"transcript={len(state.transcript)} pending={state.pending}")

        store.subscribe(listener)

        class RecordingGateway(make_gateway):
            async def ask(self, message: str):
                events.append("request")
                return await super().ask(message)

        await dispatch(store, RecordingGateway(GatewayReply(reply="hi")), "hello")

        assert events == [
            "transcript=1 pending=False",
            "transcript=1 pending=True",
            "request",
            "transcript=2 pending=True",
            "transcript=2 pending=False",
        ]

    @pytest.mark.asyncio
    async def test_success_reply(self, store: ConversationStore, make_gateway):
        gateway = make_gateway(GatewayReply(reply="Bonjour"))

        await dispatch(store, gateway, "Hello")

        transcript = store.state.transcript
        assert [m.sender for m in transcript] == [Sender.USER, Sender.BOT]
        assert transcript[1].text == "Bonjour"
        assert store.state.last_error is None
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_success_reply_leaves_prior_error_standing(self, store: ConversationStore, make_gateway):
        store.set_error("earlier failure")

        await dispatch(store, make_gateway(GatewayReply(reply="Bonjour")), "Hello")

        assert store.state.last_error == "earlier failure"

    @pytest.mark.asyncio
    async def test_missing_reply_uses_fallback(self, store: ConversationStore, make_gateway):
        store.set_error("earlier failure")

        await dispatch(store, make_gateway(GatewayReply()), "Hello")

        assert store.state.transcript[-1].sender == Sender.BOT
        assert store.state.transcript[-1].text == NO_REPLY_TEXT
        assert store.state.last_error == "earlier failure"
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_gateway_error(self, store: ConversationStore, make_gateway):
        gateway = make_gateway(GatewayRejected(status_code=429, error="rate limited"))

        await dispatch(store, gateway, "Hello")

        assert store.state.last_error == "rate limited"
        assert store.state.transcript[-1].sender == Sender.BOT
        assert "rate limited" in store.state.transcript[-1].text
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_gateway_error_without_description(self, store: ConversationStore, make_gateway):
        await dispatch(store, make_gateway(GatewayRejected(status_code=500)), "Hello")

        assert store.state.last_error == UNKNOWN_ERROR_TEXT
        assert UNKNOWN_ERROR_TEXT in store.state.transcript[-1].text

    @pytest.mark.asyncio
    async def test_transport_failure(self, store: ConversationStore, make_gateway):
        gateway = make_gateway(TransportFailure(reason="connection refused"))

        await dispatch(store, gateway, "Hello")

        assert store.state.last_error == TRANSPORT_FAILURE_TEXT
        assert store.state.transcript[-1].text == TRANSPORT_FAILURE_TEXT
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_gateway_exception_becomes_transport_failure(self, store: ConversationStore, make_gateway):
        """Test that an exception escaping the gateway is surfaced, not raised."""
        gateway = make_gateway(ConnectionRefusedError("refused"))

        accepted = await dispatch(store, gateway, "Hello")

        assert accepted is True
        assert store.state.last_error == TRANSPORT_FAILURE_TEXT
        assert store.state.transcript[-1].text == TRANSPORT_FAILURE_TEXT
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_each_send_adds_exactly_two_messages(self, store: ConversationStore, make_gateway):
        gateway = make_gateway(
            GatewayReply(reply="one"),
            GatewayRejected(status_code=500, error="down"),
            TransportFailure(reason="timeout"),
        )

        for text in ("a", "b", "c"):
            await dispatch(store, gateway, text)

        senders = [m.sender for m in store.state.transcript]
        assert senders == [Sender.USER, Sender.BOT] * 3
        assert len(gateway.calls) == 3

    @pytest.mark.asyncio
    async def test_send_while_pending_is_noop(self, store: ConversationStore, make_gateway):
        """Test single-flight: a second send during a dispatch does nothing."""
        gateway = make_gateway(GatewayReply(reply="first"), hold=True)

        first = asyncio.create_task(dispatch(store, gateway, "first"))
        await gateway.started.wait()

        assert await dispatch(store, gateway, "second") is False
        assert gateway.calls == ["first"]
        assert len(store.state.transcript) == 1

        gateway.release()
        await first
        assert [m.text for m in store.state.transcript] == ["first", "first"]

    @pytest.mark.asyncio
    async def test_reset_mid_flight_discards_reply(self, store: ConversationStore, make_gateway):
        """Test that a reply arriving after a reset is not appended."""
        gateway = make_gateway(GatewayRejected(status_code=500, error="late"), hold=True)

        task = asyncio.create_task(dispatch(store, gateway, "Hello"))
        await gateway.started.wait()

        store.reset()
        assert store.state.transcript == ()
        assert store.state.pending is True

        gateway.release()
        assert await task is True

        assert store.state.transcript == ()
        assert store.state.last_error is None
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_cancellation_clears_pending(self, store: ConversationStore, make_gateway):
        gateway = make_gateway(hold=True)

        task = asyncio.create_task(dispatch(store, gateway, "Hello"))
        await gateway.started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert store.state.pending is False

    @pytest.mark.asyncio
    async def test_debug_callback_receives_trace(self, store: ConversationStore, make_gateway):
        entries: list[tuple[str, str, str]] = []

        await dispatch(
            store,
            make_gateway(TransportFailure(reason="refused")),
            "Hello",
            debug=lambda level, component, message: entries.append((level, component, message)),
        )
        await dispatch(store, make_gateway(), "   ", debug=lambda *args: entries.append(args))

        levels = [level for level, _, _ in entries]
        assert "info" in levels
        assert "error" in levels
        assert all(component == "Dispatch" for _, component, _ in entries)
        assert entries[-1][2] == "Ignoring empty message"


class TestConversationSession:
    """Tests for the session facade."""

    @pytest.mark.asyncio
    async def test_send_and_reset(self, make_session):
        session: ConversationSession = make_session(GatewayReply(reply="Bonjour"))

        assert await session.send("Hello") is True
        assert [m.text for m in session.state.transcript] == ["Hello", "Bonjour"]

        session.reset()
        session.reset()
        assert session.state.transcript == ()
        assert session.state.last_error is None

    @pytest.mark.asyncio
    async def test_dismiss_error_keeps_transcript(self, make_session):
        session: ConversationSession = make_session(GatewayRejected(status_code=429, error="rate limited"))
        await session.send("Hello")
        transcript = session.state.transcript

        session.dismiss_error()

        assert session.state.last_error is None
        assert session.state.transcript == transcript

    @pytest.mark.asyncio
    async def test_can_send_gates_blank_and_pending(self, make_session):
        session: ConversationSession = make_session(hold=True)
        gateway = session.gateway

        assert session.can_send("hi") is True
        assert session.can_send("   ") is False

        task = asyncio.create_task(session.send("hi"))
        await gateway.started.wait()
        assert session.can_send("again") is False

        gateway.release()
        await task
        assert session.can_send("again") is True

    @pytest.mark.asyncio
    async def test_subscribe_sees_pending_transitions(self, make_session):
        session: ConversationSession = make_session(GatewayReply(reply="ok"))
        pending_flags: list[bool] = []
        session.subscribe(lambda state: pending_flags.append(state.pending))

        await session.send("Hello")

        assert pending_flags[0] is False
        assert True in pending_flags
        assert pending_flags[-1] is False

    @pytest.mark.asyncio
    async def test_context_manager_closes_gateway(self, make_session):
        session: ConversationSession = make_session()
        async with session:
            pass
        assert session.gateway.closed is True  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_reset_while_pending_is_logged(self, make_session):
        session: ConversationSession = make_session(hold=True)
        gateway = session.gateway
        entries: list[tuple[str, str, str]] = []
        session.set_debug_callback(lambda *args: entries.append(args))

        task = asyncio.create_task(session.send("Hello"))
        await gateway.started.wait()
        session.reset()
        gateway.release()
        await task

        assert ("warning", "Session", "Reset while a reply is pending; it will be discarded") in entries
        assert any(component == "Dispatch" and level == "warning" for level, component, _ in entries)

"""Tests for Slack event handlers."""

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from gptbridge.domain.exceptions import DispatchError, ThreadCreationError
from gptbridge.infrastructure.events import MessageEventHub
from gptbridge.infrastructure.slack import SlackEventAdapter, SlackInteractionResponder
from gptbridge.presentation.slack_handlers import (
    ANY_COMMAND,
    COMMAND_FAILED_TEXT,
    register_handlers,
)

THREAD_TS = "1700000000.000100"


@pytest.fixture
def bot_user_id() -> str:
    """Bot user ID for testing."""
    return "U_BOT_123"


@pytest.fixture
def hub() -> MessageEventHub:
    return MessageEventHub()


@pytest.fixture
def mock_dispatcher() -> Mock:
    mock = Mock()
    mock.dispatch = AsyncMock()
    return mock


@pytest.fixture
def mock_start_conversation() -> Mock:
    mock = Mock()
    mock.execute = AsyncMock()
    return mock


@pytest.fixture
def registered_handlers(
    hub: MessageEventHub,
    mock_dispatcher: Mock,
    mock_start_conversation: Mock,
    bot_user_id: str,
) -> dict[Any, Any]:
    """Register handlers and return captured handler dict."""
    handlers: dict[Any, Any] = {}
    mock_app = Mock()

    def capture(key: Any):
        def decorator(func):
            handlers[key] = func
            return func

        return decorator

    mock_app.event = capture
    mock_app.command = capture

    register_handlers(
        mock_app,
        hub=hub,
        event_adapter=SlackEventAdapter(),
        dispatcher=mock_dispatcher,
        start_conversation=mock_start_conversation,
        bot_user_id=bot_user_id,
        keyword="!gpt",
    )

    return handlers


def make_event(**overrides: Any) -> dict[str, Any]:
    event = {
        "type": "message",
        "user": "U1",
        "text": "Hello",
        "ts": "1700000001.000200",
        "thread_ts": THREAD_TS,
        "channel": "C1",
    }
    event.update(overrides)
    return event


class TestMessageHandler:
    """Tests for the message event handler."""

    async def test_thread_message_is_published(
        self, registered_handlers: dict[Any, Any], hub: MessageEventHub
    ) -> None:
        collector = hub.subscribe(
            channel_id="C1", thread_ts=THREAD_TS, author_id="U1", limit=5, timeout=1
        )

        await registered_handlers["message"](make_event())

        message = await collector.__anext__()
        assert message.text == "Hello"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"bot_id": "B1"},
            {"user": "U_BOT_123"},
            {"subtype": "message_changed"},
            {"subtype": "channel_join"},
        ],
    )
    async def test_ignored_events(
        self,
        registered_handlers: dict[Any, Any],
        hub: MessageEventHub,
        overrides: dict[str, Any],
    ) -> None:
        """Test that bot, self, and non-user events are not published."""
        collector = hub.subscribe(
            channel_id="C1", thread_ts=THREAD_TS, author_id="U1", limit=5, timeout=1
        )

        await registered_handlers["message"](make_event(**overrides))

        collector.close()
        assert [m async for m in collector] == []

    async def test_thread_broadcast_is_published(
        self, registered_handlers: dict[Any, Any], hub: MessageEventHub
    ) -> None:
        collector = hub.subscribe(
            channel_id="C1", thread_ts=THREAD_TS, author_id="U1", limit=1, timeout=1
        )

        await registered_handlers["message"](make_event(subtype="thread_broadcast"))

        assert [m.text async for m in collector] == ["Hello"]

    async def test_direct_message_thread_is_published(
        self, registered_handlers: dict[Any, Any], hub: MessageEventHub
    ) -> None:
        """Test that replies in a chat started from a DM reach the session."""
        collector = hub.subscribe(
            channel_id="D123", thread_ts=THREAD_TS, author_id="U1", limit=1, timeout=1
        )

        await registered_handlers["message"](
            make_event(channel="D123", channel_type="im")
        )

        assert [m.text async for m in collector] == ["Hello"]

    async def test_keyword_starts_conversation(
        self,
        registered_handlers: dict[Any, Any],
        mock_start_conversation: Mock,
    ) -> None:
        event = make_event(text=" !GPT ", thread_ts=None, ts="1700000005.000100")

        await registered_handlers["message"](event)

        mock_start_conversation.execute.assert_awaited_once_with(
            channel_id="C1", user_id="U1", parent_ts="1700000005.000100"
        )

    async def test_keyword_in_thread_is_ignored(
        self,
        registered_handlers: dict[Any, Any],
        mock_start_conversation: Mock,
    ) -> None:
        await registered_handlers["message"](make_event(text="!gpt"))

        mock_start_conversation.execute.assert_not_awaited()

    async def test_other_text_does_not_start_conversation(
        self,
        registered_handlers: dict[Any, Any],
        mock_start_conversation: Mock,
    ) -> None:
        await registered_handlers["message"](
            make_event(text="tell me about !gpt", thread_ts=None)
        )

        mock_start_conversation.execute.assert_not_awaited()

    async def test_keyword_thread_creation_error_is_logged(
        self,
        registered_handlers: dict[Any, Any],
        mock_start_conversation: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_start_conversation.execute.side_effect = ThreadCreationError("C1")

        await registered_handlers["message"](make_event(text="!gpt", thread_ts=None))

        assert "Failed to start a keyword chat" in caplog.text


class TestCommandHandler:
    """Tests for the slash command handler."""

    def test_listens_to_every_command(self, registered_handlers: dict[Any, Any]) -> None:
        assert ANY_COMMAND in registered_handlers
        assert ANY_COMMAND.match("/gpt")
        assert ANY_COMMAND.match("/image")

    async def test_acks_and_dispatches(
        self, registered_handlers: dict[Any, Any], mock_dispatcher: Mock
    ) -> None:
        ack = AsyncMock()
        respond = AsyncMock()
        command = {
            "command": "/image",
            "text": "a cat",
            "user_id": "U1",
            "channel_id": "C1",
        }

        await registered_handlers[ANY_COMMAND](ack=ack, command=command, respond=respond)

        ack.assert_awaited_once()
        invocation, responder = mock_dispatcher.dispatch.await_args.args
        assert invocation.name == "image"
        assert invocation.text == "a cat"
        assert isinstance(responder, SlackInteractionResponder)

    @pytest.mark.parametrize(
        "error", [DispatchError("unknown"), RuntimeError("boom")]
    )
    async def test_failure_replies_privately(
        self,
        registered_handlers: dict[Any, Any],
        mock_dispatcher: Mock,
        error: Exception,
    ) -> None:
        mock_dispatcher.dispatch.side_effect = error
        respond = AsyncMock()
        command = {"command": "/unknown", "user_id": "U1", "channel_id": "C1"}

        await registered_handlers[ANY_COMMAND](
            ack=AsyncMock(), command=command, respond=respond
        )

        respond.assert_awaited_once_with(
            text=COMMAND_FAILED_TEXT, response_type="ephemeral"
        )

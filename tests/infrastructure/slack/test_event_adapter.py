"""Tests for SlackEventAdapter."""

from datetime import datetime, timezone

import pytest

from gptbridge.domain.entities import CommandInvocation
from gptbridge.infrastructure.slack import SlackEventAdapter


@pytest.fixture
def adapter() -> SlackEventAdapter:
    return SlackEventAdapter()


class TestToMessage:
    """Tests for message event conversion."""

    def test_thread_reply(self, adapter: SlackEventAdapter) -> None:
        event = {
            "type": "message",
            "user": "U123",
            "text": "Hello",
            "ts": "1700000001.000200",
            "thread_ts": "1700000000.000100",
            "channel": "C123",
        }

        message = adapter.to_message(event)

        assert message.id == "1700000001.000200"
        assert message.channel_id == "C123"
        assert message.user.id == "U123"
        assert message.user.is_bot is False
        assert message.text == "Hello"
        assert message.thread_ts == "1700000000.000100"
        assert message.is_in_thread()
        assert message.timestamp == datetime.fromtimestamp(
            1700000001.0002, tz=timezone.utc
        )

    def test_top_level_message(self, adapter: SlackEventAdapter) -> None:
        event = {"user": "U123", "text": "!gpt", "ts": "1700000000.000100", "channel": "C1"}

        message = adapter.to_message(event)

        assert message.thread_ts is None
        assert not message.is_in_thread()

    def test_bot_message(self, adapter: SlackEventAdapter) -> None:
        """Test that bot_id marks the author as a bot."""
        event = {
            "subtype": "bot_message",
            "bot_id": "B999",
            "text": "beep",
            "ts": "1700000000.000100",
            "channel": "C1",
        }

        message = adapter.to_message(event)

        assert message.user.id == "B999"
        assert message.user.is_bot is True

    def test_missing_text(self, adapter: SlackEventAdapter) -> None:
        event = {"user": "U1", "ts": "1700000000.000100", "channel": "C1"}

        assert adapter.to_message(event).text == ""


class TestToCommand:
    """Tests for slash command conversion."""

    def test_strips_slash(self, adapter: SlackEventAdapter) -> None:
        command = {
            "command": "/image",
            "text": "a cat wearing a hat",
            "user_id": "U123",
            "channel_id": "C123",
        }

        assert adapter.to_command(command) == CommandInvocation(
            name="image",
            text="a cat wearing a hat",
            user_id="U123",
            channel_id="C123",
        )

    def test_missing_text(self, adapter: SlackEventAdapter) -> None:
        command = {"command": "/gpt", "user_id": "U123", "channel_id": "C123"}

        invocation = adapter.to_command(command)

        assert invocation.name == "gpt"
        assert invocation.text == ""

"""Slack event adapter."""

from datetime import datetime, timezone
from typing import Any

from gptbridge.domain.entities import CommandInvocation, Message, User


class SlackEventAdapter:
    """Convert Slack payloads to domain entities.

    This adapter translates Slack-specific event payloads into
    platform-independent domain entities.
    """

    def to_message(self, event: dict[str, Any]) -> Message:
        """Convert a Slack message event to a Message entity.

        Args:
            event: Slack message event payload.

        Returns:
            Message entity.
        """
        user_id = event.get("user") or event.get("bot_id", "")
        user = User(
            id=user_id,
            name=event.get("username", user_id),
            is_bot=bool(event.get("bot_id")) or event.get("subtype") == "bot_message",
        )

        ts = event["ts"]
        timestamp = datetime.fromtimestamp(float(ts), tz=timezone.utc)

        return Message(
            id=ts,
            channel_id=event["channel"],
            user=user,
            text=event.get("text", ""),
            timestamp=timestamp,
            thread_ts=event.get("thread_ts"),
        )

    def to_command(self, command: dict[str, Any]) -> CommandInvocation:
        """Convert a slash command payload to a CommandInvocation.

        Args:
            command: Slack slash command payload.

        Returns:
            CommandInvocation entity.
        """
        return CommandInvocation(
            name=command["command"].lstrip("/"),
            text=command.get("text", ""),
            user_id=command["user_id"],
            channel_id=command["channel_id"],
        )

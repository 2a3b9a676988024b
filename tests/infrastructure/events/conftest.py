"""Common fixtures for event tests."""

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from gptbridge.domain.entities import Message, User


@pytest.fixture
def make_message() -> Callable[..., Message]:
    """Factory for inbound messages (defaults: thread T1 in C1 by U1)."""
    counter = 0

    def factory(
        text: str = "hello",
        user_id: str = "U1",
        channel_id: str = "C1",
        thread_ts: str | None = "1700000000.000100",
        is_bot: bool = False,
    ) -> Message:
        nonlocal counter
        counter += 1
        return Message(
            id=f"1700000001.{counter:06d}",
            channel_id=channel_id,
            user=User(id=user_id, name=user_id, is_bot=is_bot),
            text=text,
            timestamp=datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
            thread_ts=thread_ts,
        )

    return factory

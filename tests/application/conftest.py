"""Common fixtures for application tests."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from gptbridge.config import SessionConfig
from gptbridge.domain.entities import (
    ChatMessage,
    CompletionResult,
    Message,
    Thread,
    User,
)
from gptbridge.infrastructure.events import MessageEventHub


class FakeMessagingService:
    """In-memory MessagingService recording what was sent."""

    def __init__(self, thread: Thread) -> None:
        self.thread = thread
        self.created: list[dict[str, Any]] = []
        self.sent: list[dict[str, Any]] = []
        self.create_error: Exception | None = None
        self.send_error: Exception | None = None
        self.failing_sends: list[Exception] = []

    async def create_thread(
        self, channel_id: str, title: str, parent_ts: str | None = None
    ) -> Thread:
        if self.create_error is not None:
            raise self.create_error
        self.created.append(
            {"channel_id": channel_id, "title": title, "parent_ts": parent_ts}
        )
        return self.thread

    async def send_message(
        self, channel_id: str, text: str, thread_ts: str | None = None
    ) -> None:
        if self.failing_sends:
            raise self.failing_sends.pop(0)
        if self.send_error is not None:
            raise self.send_error
        self.sent.append({"channel_id": channel_id, "text": text, "thread_ts": thread_ts})

    @property
    def texts(self) -> list[str]:
        return [sent["text"] for sent in self.sent]


class FakeCompletionService:
    """CompletionService returning scripted results or raising errors."""

    def __init__(self) -> None:
        self.results: list[CompletionResult | Exception] = []
        self.calls: list[dict[str, Any]] = []

    def reply(self, content: str, total_tokens: int) -> None:
        self.results.append(
            CompletionResult(
                message=ChatMessage.assistant(content), total_tokens=total_tokens
            )
        )

    def fail(self, error: Exception) -> None:
        self.results.append(error)

    async def complete(
        self,
        history: list[ChatMessage],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        self.calls.append(
            {"history": list(history), "model": model, "max_tokens": max_tokens}
        )
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def thread() -> Thread:
    """Thread created for sessions under test."""
    return Thread(channel_id="C123", thread_ts="1700000000.000100")


@pytest.fixture
def messaging(thread: Thread) -> FakeMessagingService:
    return FakeMessagingService(thread)


@pytest.fixture
def completion() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def hub() -> MessageEventHub:
    return MessageEventHub()


@pytest.fixture
def session_config() -> SessionConfig:
    """Session settings with a short timeout."""
    return SessionConfig(max_turns=5, inactivity_timeout_seconds=600)


@pytest.fixture
def make_message(thread: Thread) -> Callable[..., Message]:
    """Factory for inbound messages posted in the session thread."""
    counter = 0

    def factory(
        text: str,
        user_id: str = "42",
        is_bot: bool = False,
        channel_id: str | None = None,
        thread_ts: str | None = "",
    ) -> Message:
        nonlocal counter
        counter += 1
        return Message(
            id=f"1700000001.{counter:06d}",
            channel_id=channel_id or thread.channel_id,
            user=User(id=user_id, name=f"user{user_id}", is_bot=is_bot),
            text=text,
            timestamp=datetime(2024, 1, 1, 12, 0, counter, tzinfo=timezone.utc),
            thread_ts=thread.thread_ts if thread_ts == "" else thread_ts,
        )

    return factory


@pytest.fixture
def wait_until() -> Callable[[Callable[[], bool]], Awaitable[None]]:
    """Wait until a predicate holds, failing after one second."""

    async def waiter(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("Condition not met in time")
            await asyncio.sleep(0.001)

    return waiter

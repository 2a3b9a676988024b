"""Filtered message collector."""

import asyncio
import logging
from enum import Enum

from gptbridge.domain.entities import Message

logger = logging.getLogger(__name__)


class CollectorEndReason(Enum):
    """Why a collector stopped yielding messages."""

    LIMIT = "limit"
    TIMEOUT = "timeout"
    CLOSED = "closed"


class MessageCollector:
    """Async iterator over the messages of one author in one thread.

    Messages are fed by the event hub and yielded in arrival order.
    Iteration ends without error once `limit` messages have been yielded,
    or when no matching message arrives within `timeout` seconds. A
    finished collector cannot be restarted.

    Usage:
        async for message in collector:
            ...
    """

    def __init__(
        self,
        channel_id: str,
        thread_ts: str,
        author_id: str,
        limit: int,
        timeout: float,
    ) -> None:
        """Initialize the collector.

        Args:
            channel_id: Channel hosting the thread.
            thread_ts: Thread the messages must belong to.
            author_id: Only this user's messages are collected.
            limit: Maximum number of messages to yield.
            timeout: Inactivity timeout in seconds.
        """
        if limit <= 0:
            raise ValueError("limit must be positive")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self.channel_id = channel_id
        self.thread_ts = thread_ts
        self.author_id = author_id
        self._limit = limit
        self._timeout = timeout
        self._queue: asyncio.Queue[Message | None] = asyncio.Queue()
        self._yielded = 0
        self._end_reason: CollectorEndReason | None = None

    def matches(self, message: Message) -> bool:
        """Check whether a message belongs to this collector."""
        return (
            not message.user.is_bot
            and message.user.id == self.author_id
            and message.channel_id == self.channel_id
            and message.thread_ts == self.thread_ts
        )

    def feed(self, message: Message) -> bool:
        """Offer a message to the collector.

        Args:
            message: Any inbound message.

        Returns:
            True if the message matched and was queued.
        """
        if self.is_finished or not self.matches(message):
            return False
        self._queue.put_nowait(message)
        return True

    def close(self) -> None:
        """End iteration. Queued messages are dropped."""
        if not self.is_finished:
            self._finish(CollectorEndReason.CLOSED)
            # Wake a pending __anext__
            self._queue.put_nowait(None)

    @property
    def is_finished(self) -> bool:
        return self._end_reason is not None

    @property
    def end_reason(self) -> CollectorEndReason | None:
        return self._end_reason

    @property
    def yielded_count(self) -> int:
        return self._yielded

    def __aiter__(self) -> "MessageCollector":
        return self

    async def __anext__(self) -> Message:
        if self.is_finished:
            raise StopAsyncIteration
        if self._yielded >= self._limit:
            self._finish(CollectorEndReason.LIMIT)
            raise StopAsyncIteration

        try:
            message = await asyncio.wait_for(self._queue.get(), timeout=self._timeout)
        except asyncio.TimeoutError:
            self._finish(CollectorEndReason.TIMEOUT)
            raise StopAsyncIteration from None

        if message is None or self.is_finished:
            raise StopAsyncIteration

        self._yielded += 1
        return message

    def _finish(self, reason: CollectorEndReason) -> None:
        if self._end_reason is None:
            self._end_reason = reason
            logger.debug(
                "Collector for %s:%s ended (%s) after %d message(s)",
                self.channel_id,
                self.thread_ts,
                reason.value,
                self._yielded,
            )

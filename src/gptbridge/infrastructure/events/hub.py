"""Fan-out of inbound messages to collectors."""

import logging

from gptbridge.domain.entities import Message
from gptbridge.infrastructure.events.collector import MessageCollector

logger = logging.getLogger(__name__)


class MessageEventHub:
    """Delivers every inbound message to the subscribed collectors.

    The platform's event listener publishes into the hub; each session
    holds its own collector, which keeps only the messages it matches.
    """

    def __init__(self) -> None:
        """Initialize the hub."""
        self._collectors: list[MessageCollector] = []

    def subscribe(
        self,
        channel_id: str,
        thread_ts: str,
        author_id: str,
        limit: int,
        timeout: float,
    ) -> MessageCollector:
        """Create and register a collector.

        Args:
            channel_id: Channel hosting the thread.
            thread_ts: Thread to collect from.
            author_id: Author to collect from.
            limit: Maximum number of messages.
            timeout: Inactivity timeout in seconds.

        Returns:
            The registered collector.
        """
        collector = MessageCollector(
            channel_id=channel_id,
            thread_ts=thread_ts,
            author_id=author_id,
            limit=limit,
            timeout=timeout,
        )
        self._collectors.append(collector)
        logger.debug(
            "Subscribed collector: channel=%s, thread_ts=%s, author=%s",
            channel_id,
            thread_ts,
            author_id,
        )
        return collector

    def unsubscribe(self, collector: MessageCollector) -> None:
        """Remove a collector and close it."""
        collector.close()
        if collector in self._collectors:
            self._collectors.remove(collector)
            logger.debug(
                "Unsubscribed collector: channel=%s, thread_ts=%s",
                collector.channel_id,
                collector.thread_ts,
            )

    def publish(self, message: Message) -> int:
        """Deliver a message to all collectors.

        Args:
            message: Inbound message.

        Returns:
            Number of collectors that accepted the message.
        """
        delivered = 0
        for collector in list(self._collectors):
            if collector.feed(message):
                delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._collectors)

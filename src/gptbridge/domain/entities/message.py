"""Inbound platform message entity."""

from dataclasses import dataclass
from datetime import datetime

from gptbridge.domain.entities.user import User


@dataclass(frozen=True)
class Message:
    """Message entity.

    Attributes:
        id: Platform-specific message ID.
        channel_id: Channel where the message was posted.
        user: User who sent the message.
        text: Message content.
        timestamp: When the message was sent.
        thread_ts: Parent message timestamp (if in a thread).
    """

    id: str
    channel_id: str
    user: User
    text: str
    timestamp: datetime
    thread_ts: str | None = None

    def is_in_thread(self) -> bool:
        """Check if this message is in a thread.

        Returns:
            True if the message is a thread reply.
        """
        return self.thread_ts is not None

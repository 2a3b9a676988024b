"""Thread entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Thread:
    """A platform sub-channel dedicated to one conversation.

    Attributes:
        channel_id: Channel that hosts the thread.
        thread_ts: Timestamp of the thread's root message.
    """

    channel_id: str
    thread_ts: str

    @property
    def key(self) -> str:
        """Identity key of the thread."""
        return f"{self.channel_id}:{self.thread_ts}"

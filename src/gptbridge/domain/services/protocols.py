"""Domain service protocols."""

from typing import Protocol

from gptbridge.domain.entities import ChatMessage, CompletionResult, Thread


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines the interface for creating conversation threads
    and sending messages to any messaging platform (Slack, Discord, etc.).
    """

    async def create_thread(
        self,
        channel_id: str,
        title: str,
        parent_ts: str | None = None,
    ) -> Thread:
        """Create a thread in a channel.

        Args:
            channel_id: Channel to host the thread.
            title: Text of the thread's opening message.
            parent_ts: Existing message to start the thread from. When
                omitted, a new root message is posted.

        Returns:
            The created thread.

        Raises:
            ThreadCreationError: If the platform refuses.
        """
        ...

    async def send_message(
        self,
        channel_id: str,
        text: str,
        thread_ts: str | None = None,
    ) -> None:
        """Send a message to a channel.

        Returns only after the platform confirmed delivery.

        Args:
            channel_id: Target channel ID.
            text: Message content.
            thread_ts: Thread timestamp for thread replies.

        Raises:
            ChannelNotAccessibleError: The bot can no longer post there.
            MessageDeliveryError: Delivery failed but may succeed later.
        """
        ...


class InteractionResponder(Protocol):
    """Response channel of one command invocation."""

    async def defer(self, text: str) -> None:
        """Post a placeholder response that is edited later."""
        ...

    async def edit_original(self, text: str) -> None:
        """Replace the deferred response."""
        ...

    async def followup(self, text: str) -> None:
        """Post an additional visible response."""
        ...

    async def reply_privately(self, text: str) -> None:
        """Respond to the invoking user only."""
        ...


class CompletionService(Protocol):
    """Chat completion abstraction."""

    async def complete(
        self,
        history: list[ChatMessage],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Generate the next assistant message for a transcript.

        Args:
            history: Conversation transcript, oldest first.
            model: Model name (defaults to the configured model).
            max_tokens: Upper bound on generated tokens.

        Returns:
            Generated message and the reported total token usage.
        """
        ...


class ImageService(Protocol):
    """Image generation abstraction."""

    async def generate_image(self, prompt: str) -> str:
        """Generate an image and return its URL."""
        ...

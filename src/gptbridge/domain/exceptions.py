"""Domain exceptions."""


class ThreadCreationError(Exception):
    """The platform refused to create a conversation thread.

    Raised when the bot lacks permission to post in the origin channel,
    the channel is archived, or the request is rate limited.
    """

    def __init__(self, channel_id: str, message: str = "") -> None:
        """Initialize.

        Args:
            channel_id: Channel the thread was requested in.
            message: Error message (optional).
        """
        self.channel_id = channel_id
        super().__init__(message or f"Cannot create a thread in channel {channel_id}")


class BudgetExceededError(Exception):
    """The remaining token budget is too small to send a request."""

    def __init__(self, remaining: int, reserve: int) -> None:
        """Initialize.

        Args:
            remaining: The computed remaining budget.
            reserve: The minimum budget required for a reply.
        """
        self.remaining = remaining
        self.reserve = reserve
        super().__init__(
            f"Remaining token budget {remaining} is below the reserve of {reserve}"
        )


class DispatchError(Exception):
    """No handler is registered for a command."""

    def __init__(self, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(f"Unknown command: {command_name}")


class ChannelNotAccessibleError(Exception):
    """The bot can no longer post to a channel.

    Raised when the bot left the channel, or the channel was archived
    or deleted.
    """

    def __init__(self, channel_id: str, message: str = "") -> None:
        """Initialize.

        Args:
            channel_id: ID of the inaccessible channel.
            message: Error message (optional).
        """
        self.channel_id = channel_id
        super().__init__(message or f"Channel {channel_id} is not accessible")


class MessageDeliveryError(Exception):
    """A message could not be delivered to a channel.

    Raised for transient failures (rate limiting, network errors) where
    the channel itself is still accessible.
    """

    def __init__(self, channel_id: str, message: str = "") -> None:
        """Initialize.

        Args:
            channel_id: Target channel ID.
            message: Error message (optional).
        """
        self.channel_id = channel_id
        super().__init__(message or f"Cannot deliver a message to channel {channel_id}")

"""Slack messaging service."""

import logging

import aiohttp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from gptbridge.domain.entities import Thread
from gptbridge.domain.exceptions import (
    ChannelNotAccessibleError,
    MessageDeliveryError,
    ThreadCreationError,
)

logger = logging.getLogger(__name__)

# Error codes that indicate the channel is not accessible
_CHANNEL_NOT_ACCESSIBLE_ERRORS = frozenset(
    {
        "not_in_channel",
        "channel_not_found",
        "is_archived",
    }
)


def _error_code(error: SlackApiError) -> str:
    """Extract the Slack error code (e.g. "not_in_channel") from an API error."""
    if error.response is None:
        return ""
    return error.response.get("error", "") or ""


class SlackMessagingService:
    """Slack implementation of MessagingService.

    A conversation thread is a root message plus its replies; the root
    message's `ts` identifies the thread.
    """

    def __init__(self, client: AsyncWebClient) -> None:
        """Initialize the service.

        Args:
            client: Slack AsyncWebClient instance.
        """
        self._client = client
        self._bot_user_id: str | None = None

    async def create_thread(
        self,
        channel_id: str,
        title: str,
        parent_ts: str | None = None,
    ) -> Thread:
        """Create a thread in a channel.

        Without `parent_ts`, a new root message is posted and becomes the
        thread. With `parent_ts`, the title is posted as the first reply
        to that message.

        Args:
            channel_id: Channel to host the thread.
            title: Text of the opening message.
            parent_ts: Existing message to start the thread from.

        Returns:
            The created thread.

        Raises:
            ThreadCreationError: If Slack refuses the message or is unreachable.
        """
        try:
            response = await self._client.chat_postMessage(
                channel=channel_id,
                text=title,
                thread_ts=parent_ts,
            )
        except SlackApiError as e:
            error_code = _error_code(e)
            raise ThreadCreationError(
                channel_id,
                f"Cannot create a thread in {channel_id}: {error_code or e!s}",
            ) from e
        except aiohttp.ClientError as e:
            raise ThreadCreationError(
                channel_id, f"Cannot create a thread in {channel_id}: {e}"
            ) from e

        thread_ts = parent_ts or response["ts"]
        logger.debug("Created thread %s in %s", thread_ts, channel_id)
        return Thread(channel_id=channel_id, thread_ts=thread_ts)

    async def send_message(
        self,
        channel_id: str,
        text: str,
        thread_ts: str | None = None,
    ) -> None:
        """Send a message to a Slack channel.

        Args:
            channel_id: Target channel ID.
            text: Message content.
            thread_ts: Thread timestamp for thread replies.

        Raises:
            ChannelNotAccessibleError: If the channel is not accessible
                (not_in_channel, channel_not_found, is_archived).
            MessageDeliveryError: If the API call or the connection fails
                for other reasons (rate limiting, network errors).
        """
        try:
            await self._client.chat_postMessage(
                channel=channel_id,
                text=text,
                thread_ts=thread_ts,
            )
        except SlackApiError as e:
            error_code = _error_code(e)
            if error_code in _CHANNEL_NOT_ACCESSIBLE_ERRORS:
                raise ChannelNotAccessibleError(
                    channel_id, f"Cannot access channel {channel_id}: {error_code}"
                ) from e
            raise MessageDeliveryError(
                channel_id, f"Cannot send to {channel_id}: {error_code or e!s}"
            ) from e
        except aiohttp.ClientError as e:
            raise MessageDeliveryError(
                channel_id, f"Cannot send to {channel_id}: {e}"
            ) from e

    async def get_bot_user_id(self) -> str:
        """Get the bot's user ID.

        Returns:
            The bot's user ID.

        Note:
            The result is cached after the first call.
        """
        if self._bot_user_id is None:
            response = await self._client.auth_test()
            self._bot_user_id = response["user_id"]
        return self._bot_user_id

"""Slack event handlers."""

import logging
import re
from typing import Any

from slack_bolt.async_app import AsyncApp
from slack_bolt.context.ack.async_ack import AsyncAck
from slack_bolt.context.respond.async_respond import AsyncRespond

from gptbridge.application.handlers import CommandDispatcher
from gptbridge.application.use_cases import StartConversationUseCase
from gptbridge.domain.exceptions import DispatchError, ThreadCreationError
from gptbridge.infrastructure.events import MessageEventHub
from gptbridge.infrastructure.slack import SlackEventAdapter, SlackInteractionResponder

logger = logging.getLogger(__name__)

COMMAND_FAILED_TEXT = "Sorry, something went wrong while handling that command."

# Every slash command goes through the dispatcher
ANY_COMMAND = re.compile(r"^/.+$")

# Message subtypes that carry a user's text
_USER_MESSAGE_SUBTYPES = {None, "thread_broadcast"}


def register_handlers(
    app: AsyncApp,
    hub: MessageEventHub,
    event_adapter: SlackEventAdapter,
    dispatcher: CommandDispatcher,
    start_conversation: StartConversationUseCase,
    bot_user_id: str,
    keyword: str | None = None,
) -> None:
    """Register Slack event handlers.

    Args:
        app: AsyncApp instance.
        hub: Hub that delivers messages to the running sessions.
        event_adapter: Adapter for converting payloads to entities.
        dispatcher: Slash command dispatcher.
        start_conversation: Use case started by the keyword trigger.
        bot_user_id: The bot's user ID.
        keyword: Message text that starts a chat (disabled if None).
    """

    @app.event("message")
    async def handle_message(event: dict[str, Any]) -> None:
        """Handle message events.

        Publishes user messages to the hub, and starts a chat when a
        top-level message equals the keyword.

        Args:
            event: Slack event payload.
        """
        if event.get("subtype") not in _USER_MESSAGE_SUBTYPES:
            return
        if event.get("bot_id") or event.get("user") == bot_user_id:
            return

        try:
            message = event_adapter.to_message(event)
        except (KeyError, ValueError):
            logger.exception("Error converting event to message")
            return

        delivered = hub.publish(message)
        logger.debug(
            "Message %s in %s delivered to %d session(s)",
            message.id,
            message.channel_id,
            delivered,
        )

        if keyword is None or message.is_in_thread():
            return
        if message.text.strip().lower() != keyword.lower():
            return

        logger.info(
            "Keyword chat requested by %s in %s", message.user.id, message.channel_id
        )
        try:
            await start_conversation.execute(
                channel_id=message.channel_id,
                user_id=message.user.id,
                parent_ts=message.id,
            )
        except ThreadCreationError as e:
            logger.warning("Failed to start a keyword chat: %s", e)
        except Exception:
            logger.exception("Error starting a keyword chat")

    @app.command(ANY_COMMAND)
    async def handle_command(
        ack: AsyncAck, command: dict[str, Any], respond: AsyncRespond
    ) -> None:
        """Handle slash commands.

        Args:
            ack: Acknowledges the command within Slack's deadline.
            command: Slash command payload.
            respond: Responds through the command's response_url.
        """
        await ack()

        invocation = event_adapter.to_command(command)
        responder = SlackInteractionResponder(respond)
        try:
            await dispatcher.dispatch(invocation, responder)
        except DispatchError as e:
            logger.warning("%s", e)
            await responder.reply_privately(COMMAND_FAILED_TEXT)
        except Exception:
            logger.exception("Error handling /%s", invocation.name)
            await responder.reply_privately(COMMAND_FAILED_TEXT)

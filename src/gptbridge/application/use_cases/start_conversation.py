"""Start conversation use case."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gptbridge.application.handlers.command_dispatcher import command_handler
from gptbridge.application.use_cases.conversation_session import ConversationSession
from gptbridge.config import SessionConfig
from gptbridge.domain.entities import CommandInvocation
from gptbridge.domain.exceptions import ThreadCreationError
from gptbridge.domain.services import (
    CompletionService,
    InteractionResponder,
    MessagingService,
)
from gptbridge.infrastructure.events import MessageEventHub

if TYPE_CHECKING:
    from gptbridge.application.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)

THREAD_CREATION_FAILED_NOTICE = (
    "Sorry, I couldn't start a chat here. "
    "Please make sure I'm a member of this channel and try again."
)


class StartConversationUseCase:
    """Creates a conversation session and runs it in the background."""

    def __init__(
        self,
        messaging_service: MessagingService,
        completion_service: CompletionService,
        hub: MessageEventHub,
        session_registry: SessionRegistry,
        config: SessionConfig,
        model: str | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            messaging_service: Service for creating threads and sending.
            completion_service: Service for generating replies.
            hub: Source of inbound messages.
            session_registry: Registry running the sessions.
            config: Session settings.
            model: Chat model name (optional).
        """
        self._messaging_service = messaging_service
        self._completion_service = completion_service
        self._hub = hub
        self._session_registry = session_registry
        self._config = config
        self._model = model

    async def execute(
        self,
        channel_id: str,
        user_id: str,
        parent_ts: str | None = None,
    ) -> ConversationSession:
        """Create a session and start it.

        Args:
            channel_id: Channel the chat was requested in.
            user_id: User who requested the chat.
            parent_ts: Message to thread the chat from (keyword trigger).

        Returns:
            The started session.

        Raises:
            ThreadCreationError: If the thread could not be created.
        """
        session = await ConversationSession.create(
            messaging_service=self._messaging_service,
            completion_service=self._completion_service,
            hub=self._hub,
            origin_channel=channel_id,
            triggering_author=user_id,
            config=self._config,
            model=self._model,
            parent_ts=parent_ts,
        )
        self._session_registry.start(session)
        return session

    @command_handler("gpt")
    async def handle_command(
        self, invocation: CommandInvocation, responder: InteractionResponder
    ) -> None:
        """Handle /gpt.

        Args:
            invocation: The command invocation.
            responder: Response channel of the invocation.
        """
        try:
            await self.execute(invocation.channel_id, invocation.user_id)
        except ThreadCreationError as e:
            logger.warning("Failed to start a chat: %s", e)
            await responder.reply_privately(THREAD_CREATION_FAILED_NOTICE)

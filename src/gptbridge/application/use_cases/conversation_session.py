"""Conversation session use case.

A session owns one thread: it collects the triggering user's messages
from the thread, forwards each one with the accumulated history to the
completion service, and relays the reply back into the thread.
"""

import logging
from enum import Enum

from gptbridge.config import SessionConfig
from gptbridge.domain.entities import ChatMessage, Thread
from gptbridge.domain.exceptions import (
    BudgetExceededError,
    ChannelNotAccessibleError,
    MessageDeliveryError,
)
from gptbridge.domain.services import (
    CompletionService,
    MessagingService,
    compute_remaining,
    estimate_tokens,
    split_message,
)
from gptbridge.infrastructure.events import MessageEventHub
from gptbridge.infrastructure.llm import (
    MalformedResponseError,
    RemoteApiError,
    RemoteAuthenticationError,
    TransportError,
)

logger = logging.getLogger(__name__)

TOO_LONG_NOTICE = (
    "Your message is too long for the remaining conversation. "
    "Please shorten it or start a new chat with /gpt."
)
RATE_LIMITED_NOTICE = "The AI service is busy right now. Please try again in a moment."
TRANSPORT_NOTICE = "I couldn't reach the AI service. Please try again."
MALFORMED_NOTICE = "The AI service returned an unexpected response. Please try again."
AUTHENTICATION_NOTICE = (
    "The AI service rejected my credentials, so this chat has to end. "
    "Please contact the bot administrator."
)
EMPTY_REPLY_NOTICE = "(The AI returned an empty response.)"
CLOSED_NOTICE = "This chat has ended. Start a new one with /gpt."


class SessionState(Enum):
    """Lifecycle states of a conversation session."""

    CREATED = "created"
    LISTENING = "listening"
    PROCESSING = "processing"
    CLOSED = "closed"
    FAILED = "failed"


class ConversationSession:
    """One chat between a single user and the completion service.

    Turns are processed strictly one at a time in arrival order. The
    history alternates user and assistant messages after an optional
    system prompt: a user message is appended only together with the
    reply it produced, so a failed turn leaves the history untouched.
    """

    def __init__(
        self,
        thread: Thread,
        author_id: str,
        messaging_service: MessagingService,
        completion_service: CompletionService,
        hub: MessageEventHub,
        config: SessionConfig,
        model: str | None = None,
    ) -> None:
        """Initialize the session.

        Use `create()` to also create the thread on the platform.

        Args:
            thread: Thread owned by this session.
            author_id: The only user whose messages are accepted.
            messaging_service: Service for sending messages.
            completion_service: Service for generating replies.
            hub: Source of inbound messages.
            config: Session limits and budget settings.
            model: Model name (defaults to the completion service's model).
        """
        self.thread = thread
        self.author_id = author_id
        self._messaging_service = messaging_service
        self._completion_service = completion_service
        self._hub = hub
        self._config = config
        self._model = model

        self.history: list[ChatMessage] = []
        self.running_total_tokens = config.baseline_tokens
        if config.system_prompt:
            self.history.append(ChatMessage.system(config.system_prompt))
            self.running_total_tokens += estimate_tokens(config.system_prompt)
        self.token_budget_remaining = max(
            config.context_window - self.running_total_tokens, 0
        )
        self.state = SessionState.CREATED

    @classmethod
    async def create(
        cls,
        messaging_service: MessagingService,
        completion_service: CompletionService,
        hub: MessageEventHub,
        origin_channel: str,
        triggering_author: str,
        config: SessionConfig,
        model: str | None = None,
        parent_ts: str | None = None,
    ) -> "ConversationSession":
        """Create a thread in the origin channel and a session bound to it.

        Args:
            messaging_service: Service for creating the thread and sending.
            completion_service: Service for generating replies.
            hub: Source of inbound messages.
            origin_channel: Channel the chat was requested in.
            triggering_author: User who started the chat.
            config: Session settings.
            model: Model name (optional).
            parent_ts: Message to start the thread from (keyword trigger).

        Returns:
            A session in the CREATED state.

        Raises:
            ThreadCreationError: If the platform refuses to create the thread.
        """
        thread = await messaging_service.create_thread(
            channel_id=origin_channel,
            title=config.thread_title,
            parent_ts=parent_ts,
        )
        logger.info(
            "Created session thread %s for user %s", thread.key, triggering_author
        )
        return cls(
            thread=thread,
            author_id=triggering_author,
            messaging_service=messaging_service,
            completion_service=completion_service,
            hub=hub,
            config=config,
            model=model,
        )

    @property
    def thread_id(self) -> str:
        return self.thread.key

    async def run(self) -> None:
        """Process the author's messages until the session ends.

        Ends normally when the collector reaches its message limit or
        times out. Ends early, in the FAILED state, on an authentication
        error or when the thread is no longer accessible.

        Raises:
            RuntimeError: If the session was already started.
        """
        if self.state is not SessionState.CREATED:
            raise RuntimeError(f"Session {self.thread_id} was already started")

        collector = self._hub.subscribe(
            channel_id=self.thread.channel_id,
            thread_ts=self.thread.thread_ts,
            author_id=self.author_id,
            limit=self._config.max_turns,
            timeout=self._config.inactivity_timeout_seconds,
        )
        self.state = SessionState.LISTENING
        logger.info("Session %s listening", self.thread_id)

        try:
            async for message in collector:
                self.state = SessionState.PROCESSING
                if not await self._process_turn(message.text):
                    self.state = SessionState.FAILED
                    return
                self.state = SessionState.LISTENING

            self.state = SessionState.CLOSED
            logger.info(
                "Session %s closed (%s)",
                self.thread_id,
                collector.end_reason.value if collector.end_reason else "unknown",
            )
            await self._reply(CLOSED_NOTICE)
        except ChannelNotAccessibleError as e:
            logger.warning("Session %s lost its thread: %s", self.thread_id, e)
            self.state = SessionState.FAILED
        finally:
            self._hub.unsubscribe(collector)
            if self.state not in (SessionState.CLOSED, SessionState.FAILED):
                self.state = SessionState.FAILED

    async def _process_turn(self, text: str) -> bool:
        """Run one turn.

        Args:
            text: The user's message.

        Returns:
            False if the session must end, True otherwise.
        """
        if not text.strip():
            logger.debug("Session %s: ignoring empty message", self.thread_id)
            return True

        try:
            self.token_budget_remaining = compute_remaining(
                context_window=self._config.context_window,
                running_total=self.running_total_tokens,
                estimated_new=estimate_tokens(text),
                reserve=self._config.reserve_tokens,
            )
        except BudgetExceededError as e:
            logger.info("Session %s: %s", self.thread_id, e)
            await self._reply(TOO_LONG_NOTICE)
            return True

        logger.debug(
            "Session %s: max_tokens=%d, running_total=%d",
            self.thread_id,
            self.token_budget_remaining,
            self.running_total_tokens,
        )

        pending = ChatMessage.user(text)
        try:
            result = await self._completion_service.complete(
                [*self.history, pending],
                model=self._model,
                max_tokens=self.token_budget_remaining,
            )
        except RemoteAuthenticationError as e:
            logger.error("Session %s: authentication failed: %s", self.thread_id, e)
            await self._reply(AUTHENTICATION_NOTICE)
            return False
        except RemoteApiError as e:
            await self._reply(self._describe_api_error(e))
            return True
        except TransportError as e:
            logger.warning("Session %s: transport error: %s", self.thread_id, e)
            await self._reply(TRANSPORT_NOTICE)
            return True
        except MalformedResponseError as e:
            logger.error("Session %s: malformed response: %s", self.thread_id, e)
            await self._reply(MALFORMED_NOTICE)
            return True

        self.history.append(pending)
        self.history.append(result.message)
        self.running_total_tokens = result.total_tokens

        await self._reply(result.message.content or EMPTY_REPLY_NOTICE)
        return True

    @staticmethod
    def _describe_api_error(error: RemoteApiError) -> str:
        if error.is_too_long:
            return TOO_LONG_NOTICE
        if error.is_rate_limited:
            return RATE_LIMITED_NOTICE
        return f"The AI service returned an error: {error.message}"

    async def _reply(self, text: str) -> None:
        """Send text into the thread, chunked, one chunk at a time.

        A delivery failure drops the rest of the reply and keeps the
        session running. Losing access to the thread propagates.
        """
        try:
            for chunk in split_message(text, self._config.chunk_size):
                await self._messaging_service.send_message(
                    channel_id=self.thread.channel_id,
                    text=chunk,
                    thread_ts=self.thread.thread_ts,
                )
        except MessageDeliveryError as e:
            logger.warning("Session %s: reply not delivered: %s", self.thread_id, e)

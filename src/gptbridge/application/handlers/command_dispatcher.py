"""Command dispatcher for platform slash commands."""

import logging
from collections.abc import Awaitable, Callable

from gptbridge.domain.entities import CommandInvocation
from gptbridge.domain.exceptions import DispatchError
from gptbridge.domain.services import InteractionResponder

logger = logging.getLogger(__name__)

# Handler type: async function that takes an invocation and its responder
CommandHandler = Callable[[CommandInvocation, InteractionResponder], Awaitable[None]]


def command_handler(name: str) -> Callable[[CommandHandler], CommandHandler]:
    """Decorator for registering command handlers.

    Usage:
        @command_handler("image")
        async def handle_image(invocation, responder) -> None:
            ...

    Args:
        name: Command name without the leading slash.

    Returns:
        Decorator function.
    """

    def decorator(func: CommandHandler) -> CommandHandler:
        # Store the command name as an attribute on the function
        func._command_name = name  # type: ignore[attr-defined]
        return func

    return decorator


class CommandDispatcher:
    """Routes command invocations to the handler registered for their name."""

    def __init__(self) -> None:
        """Initialize the dispatcher."""
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler) -> None:
        """Register the handler for a command name.

        Args:
            name: Command name without the leading slash.
            handler: The handler function.

        Raises:
            ValueError: If a handler is already registered for the name.
        """
        if name in self._handlers:
            raise ValueError(f"A handler is already registered for '{name}'")
        self._handlers[name] = handler
        logger.debug(
            "Registered handler for /%s: %s",
            name,
            getattr(handler, "__name__", str(handler)),
        )

    def register_handler(self, handler: CommandHandler) -> None:
        """Register a handler that was decorated with @command_handler.

        Args:
            handler: The decorated handler function.

        Raises:
            ValueError: If the handler doesn't have a _command_name attribute.
        """
        name = getattr(handler, "_command_name", None)
        if name is None:
            raise ValueError(
                f"Handler {getattr(handler, '__name__', str(handler))} "
                "has no _command_name attribute. "
                "Use the @command_handler decorator."
            )
        self.register(name, handler)

    @property
    def command_names(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(
        self, invocation: CommandInvocation, responder: InteractionResponder
    ) -> None:
        """Run the handler for an invocation.

        Args:
            invocation: The command invocation.
            responder: Response channel of the invocation.

        Raises:
            DispatchError: If no handler is registered for the command.
        """
        handler = self._handlers.get(invocation.name)
        if handler is None:
            raise DispatchError(invocation.name)

        logger.info(
            "Dispatching /%s from user %s in %s",
            invocation.name,
            invocation.user_id,
            invocation.channel_id,
        )
        await handler(invocation, responder)

"""Command handlers."""

from gptbridge.application.handlers.command_dispatcher import (
    CommandDispatcher,
    CommandHandler,
    command_handler,
)

__all__ = ["CommandDispatcher", "CommandHandler", "command_handler"]

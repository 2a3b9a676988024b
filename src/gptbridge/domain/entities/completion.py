"""Completion result entity."""

from dataclasses import dataclass

from gptbridge.domain.entities.chat_message import ChatMessage


@dataclass(frozen=True)
class CompletionResult:
    """Result of one chat completion call.

    Attributes:
        message: The generated assistant message.
        total_tokens: Total token usage reported by the provider.
    """

    message: ChatMessage
    total_tokens: int

"""Domain entities."""

from gptbridge.domain.entities.chat_message import ChatMessage, Role
from gptbridge.domain.entities.command import CommandInvocation
from gptbridge.domain.entities.completion import CompletionResult
from gptbridge.domain.entities.message import Message
from gptbridge.domain.entities.thread import Thread
from gptbridge.domain.entities.user import User

__all__ = [
    "ChatMessage",
    "CommandInvocation",
    "CompletionResult",
    "Message",
    "Role",
    "Thread",
    "User",
]

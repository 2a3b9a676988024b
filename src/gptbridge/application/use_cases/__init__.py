"""Application use cases."""

from gptbridge.application.use_cases.conversation_session import (
    ConversationSession,
    SessionState,
)
from gptbridge.application.use_cases.generate_image import GenerateImageUseCase
from gptbridge.application.use_cases.start_conversation import (
    StartConversationUseCase,
)

__all__ = [
    "ConversationSession",
    "GenerateImageUseCase",
    "SessionState",
    "StartConversationUseCase",
]

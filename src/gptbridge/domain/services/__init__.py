"""Domain services."""

from gptbridge.domain.services.message_splitter import (
    DEFAULT_CHUNK_SIZE,
    MIN_CHUNK_SIZE,
    split_message,
)
from gptbridge.domain.services.protocols import (
    CompletionService,
    ImageService,
    InteractionResponder,
    MessagingService,
)
from gptbridge.domain.services.token_budget import (
    DEFAULT_RESERVE_TOKENS,
    TOKENS_PER_CHARACTER,
    compute_remaining,
    estimate_tokens,
)

__all__ = [
    "CompletionService",
    "DEFAULT_CHUNK_SIZE",
    "MIN_CHUNK_SIZE",
    "DEFAULT_RESERVE_TOKENS",
    "ImageService",
    "InteractionResponder",
    "MessagingService",
    "TOKENS_PER_CHARACTER",
    "compute_remaining",
    "estimate_tokens",
    "split_message",
]

"""Remote API integration."""

from gptbridge.infrastructure.llm.client import OpenAIClient
from gptbridge.infrastructure.llm.exceptions import (
    MalformedResponseError,
    RemoteApiError,
    RemoteAuthenticationError,
    RemoteError,
    TransportError,
)

__all__ = [
    "MalformedResponseError",
    "OpenAIClient",
    "RemoteApiError",
    "RemoteAuthenticationError",
    "RemoteError",
    "TransportError",
]

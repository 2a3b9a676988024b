"""Inbound event fan-out and filtering."""

from gptbridge.infrastructure.events.collector import (
    CollectorEndReason,
    MessageCollector,
)
from gptbridge.infrastructure.events.hub import MessageEventHub

__all__ = [
    "CollectorEndReason",
    "MessageCollector",
    "MessageEventHub",
]

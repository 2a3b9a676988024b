"""Application services."""

from gptbridge.application.services.session_registry import SessionRegistry

__all__ = ["SessionRegistry"]

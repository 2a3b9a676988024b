"""Presentation layer."""

from gptbridge.presentation.slack_handlers import register_handlers

__all__ = ["register_handlers"]

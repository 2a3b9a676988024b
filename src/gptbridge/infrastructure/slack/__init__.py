"""Slack integration."""

from gptbridge.infrastructure.slack.client import SlackAppRunner, create_slack_app
from gptbridge.infrastructure.slack.event_adapter import SlackEventAdapter
from gptbridge.infrastructure.slack.manifest import build_app_manifest
from gptbridge.infrastructure.slack.messaging import SlackMessagingService
from gptbridge.infrastructure.slack.responder import SlackInteractionResponder

__all__ = [
    "SlackAppRunner",
    "SlackEventAdapter",
    "SlackInteractionResponder",
    "SlackMessagingService",
    "build_app_manifest",
    "create_slack_app",
]

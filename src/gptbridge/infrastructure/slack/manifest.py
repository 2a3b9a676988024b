"""Slack app manifest.

Slack registers slash commands through the app manifest rather than an
API call. `build_app_manifest()` produces the manifest declaring the
bot's commands, scopes and event subscriptions.
"""

from typing import Any

SLASH_COMMANDS: list[dict[str, Any]] = [
    {
        "command": "/image",
        "description": "Generate an image with DALL-E",
        "usage_hint": "[prompt]",
        "should_escape": False,
    },
    {
        "command": "/gpt",
        "description": "Start a chat with GPT-3.5",
        "should_escape": False,
    },
]

BOT_SCOPES = [
    "channels:history",
    "groups:history",
    "im:history",
    "mpim:history",
    "chat:write",
    "commands",
]

BOT_EVENTS = [
    "message.channels",
    "message.groups",
    "message.im",
    "message.mpim",
]


def build_app_manifest(app_name: str = "gptbridge") -> dict[str, Any]:
    """Build the Slack app manifest.

    Args:
        app_name: Display name of the app and its bot user.

    Returns:
        Manifest as a dict (serialize as YAML or JSON).
    """
    return {
        "display_information": {"name": app_name},
        "features": {
            "bot_user": {"display_name": app_name, "always_online": True},
            "slash_commands": [dict(command) for command in SLASH_COMMANDS],
        },
        "oauth_config": {"scopes": {"bot": list(BOT_SCOPES)}},
        "settings": {
            "event_subscriptions": {"bot_events": list(BOT_EVENTS)},
            "interactivity": {"is_enabled": True},
            "socket_mode_enabled": True,
        },
    }

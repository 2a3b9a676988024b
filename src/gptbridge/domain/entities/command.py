"""Slash command invocation entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandInvocation:
    """A platform command invoked by a user.

    Attributes:
        name: Command name without the leading slash (e.g. "gpt").
        text: Raw argument text typed after the command.
        user_id: ID of the invoking user.
        channel_id: Channel the command was invoked in.
    """

    name: str
    text: str
    user_id: str
    channel_id: str

"""Slash command responder backed by Slack's response_url."""

from slack_bolt.context.respond.async_respond import AsyncRespond


class SlackInteractionResponder:
    """Slack implementation of InteractionResponder.

    Slash commands are acknowledged by the listener; every response
    after that goes through `respond()`.
    """

    def __init__(self, respond: AsyncRespond) -> None:
        """Initialize the responder.

        Args:
            respond: Bolt's respond utility for the command.
        """
        self._respond = respond

    async def defer(self, text: str) -> None:
        await self._respond(text=text, response_type="in_channel")

    async def edit_original(self, text: str) -> None:
        await self._respond(
            text=text, response_type="in_channel", replace_original=True
        )

    async def followup(self, text: str) -> None:
        await self._respond(
            text=text, response_type="in_channel", replace_original=False
        )

    async def reply_privately(self, text: str) -> None:
        await self._respond(text=text, response_type="ephemeral")

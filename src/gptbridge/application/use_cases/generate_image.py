"""Generate image use case."""

import logging

from gptbridge.application.handlers.command_dispatcher import command_handler
from gptbridge.domain.entities import CommandInvocation
from gptbridge.domain.services import ImageService, InteractionResponder
from gptbridge.infrastructure.llm import RemoteApiError, RemoteError

logger = logging.getLogger(__name__)

PENDING_TEXT = "Generating an image..."
USAGE_TEXT = "Usage: /image <prompt>"
PROMPT_TOO_LONG_TEXT = "The prompt is too long. Please shorten it."
GENERIC_ERROR_TEXT = "An error occurred. Please try again."


class GenerateImageUseCase:
    """One-shot image generation for /image."""

    def __init__(self, image_service: ImageService) -> None:
        """Initialize the use case.

        Args:
            image_service: Service generating the image.
        """
        self._image_service = image_service

    @command_handler("image")
    async def execute(
        self, invocation: CommandInvocation, responder: InteractionResponder
    ) -> None:
        """Handle /image.

        Processing flow:
        1. Reject an empty prompt
        2. Post a placeholder response
        3. Generate the image
        4. Replace the placeholder with the URL or an error text
        5. Post the prompt as a follow-up

        Args:
            invocation: The command invocation; its text is the prompt.
            responder: Response channel of the invocation.
        """
        prompt = invocation.text.strip()
        if not prompt:
            await responder.reply_privately(USAGE_TEXT)
            return

        await responder.defer(PENDING_TEXT)

        try:
            result = await self._image_service.generate_image(prompt)
        except RemoteApiError as e:
            logger.warning("Image generation rejected: %s", e)
            result = PROMPT_TOO_LONG_TEXT if e.is_too_long else GENERIC_ERROR_TEXT
        except RemoteError as e:
            logger.error("Image generation failed: %s", e)
            result = GENERIC_ERROR_TEXT

        await responder.edit_original(result)
        await responder.followup(f"Prompt: {prompt}")

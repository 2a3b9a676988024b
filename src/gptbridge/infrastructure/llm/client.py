"""OpenAI-compatible HTTP API client."""

import logging
import time
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from gptbridge.config import OpenAIConfig
from gptbridge.domain.entities import ChatMessage, CompletionResult, Role
from gptbridge.infrastructure.llm.exceptions import (
    MalformedResponseError,
    RemoteApiError,
    RemoteAuthenticationError,
    TransportError,
)
from gptbridge.infrastructure.llm.schemas import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ErrorResponse,
    ImageGenerationRequest,
    ImageGenerationResponse,
    RequestMessage,
)

logger = logging.getLogger(__name__)

_AUTHENTICATION_STATUS_CODES = frozenset({401, 403})


class OpenAIClient:
    """Client for the chat completion and image generation endpoints.

    One HTTP request per call, no retries. The client holds no
    conversation state and is safe to share between sessions.
    """

    def __init__(
        self,
        config: OpenAIConfig,
        http_client: httpx.AsyncClient | None = None,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            config: API settings (key, base URL, model).
            http_client: Shared HTTP client. When omitted, the client
                creates and owns one.
            debug_llm_messages: Log request transcripts at DEBUG level.
        """
        self._config = config
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._debug_llm_messages = debug_llm_messages

    async def complete(
        self,
        history: list[ChatMessage],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Execute chat completion.

        Args:
            history: Conversation transcript, oldest first.
            model: Model name (defaults to the configured chat model).
            max_tokens: Upper bound on generated tokens.

        Returns:
            The first choice's message and the reported total token usage.

        Raises:
            TransportError: Network failure or unstructured HTTP error.
            RemoteAuthenticationError: Invalid API key.
            RemoteApiError: Structured error from the provider.
            MalformedResponseError: Required response fields are missing.
        """
        request = ChatCompletionRequest(
            model=model or self._config.chat_model,
            messages=[RequestMessage(**message.to_dict()) for message in history],
            max_tokens=max_tokens,
        )
        if self._debug_llm_messages:
            logger.debug("Chat completion request: %s", request.model_dump_json())

        start = time.monotonic()
        body = await self._post("/chat/completions", request)
        response = self._validate(ChatCompletionResponse, body)
        duration_ms = round((time.monotonic() - start) * 1000)

        choice = response.choices[0].message
        logger.info(
            "Chat completion: model=%s, total_tokens=%d, duration_ms=%d",
            request.model,
            response.usage.total_tokens,
            duration_ms,
        )
        return CompletionResult(
            message=ChatMessage(role=Role(choice.role), content=choice.content),
            total_tokens=response.usage.total_tokens,
        )

    async def generate_image(self, prompt: str) -> str:
        """Generate one image for a prompt.

        Args:
            prompt: Image description.

        Returns:
            URL of the generated image.

        Raises:
            TransportError: Network failure or unstructured HTTP error.
            RemoteAuthenticationError: Invalid API key.
            RemoteApiError: Structured error from the provider.
            MalformedResponseError: The response has no image URL.
        """
        request = ImageGenerationRequest(prompt=prompt, size=self._config.image_size)
        body = await self._post("/images/generations", request)
        response = self._validate(ImageGenerationResponse, body)
        logger.info("Image generated")
        return response.data[0].url

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def _post(self, path: str, request: BaseModel) -> Any:
        """POST a request model and return the decoded JSON body.

        Raises:
            TransportError: Network failure or unstructured HTTP error.
            RemoteApiError: Structured error body.
            MalformedResponseError: 2xx response that is not JSON.
        """
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self._config.base_url}{path}"

        try:
            response = await self._http.post(
                url,
                headers=headers,
                json=request.model_dump(exclude_none=True),
            )
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise TransportError(f"Request to {path} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        error_message = self._extract_error_message(body)
        if error_message is not None:
            logger.warning(
                "API error from %s (status %d): %s",
                path,
                response.status_code,
                error_message,
            )
            if response.status_code in _AUTHENTICATION_STATUS_CODES:
                raise RemoteAuthenticationError(error_message, response.status_code)
            raise RemoteApiError(error_message, response.status_code)

        if not response.is_success:
            logger.warning("HTTP %d from %s", response.status_code, path)
            raise TransportError(
                f"HTTP {response.status_code} from {path}", response.status_code
            )

        if body is None:
            raise MalformedResponseError(f"Response from {path} is not valid JSON")
        return body

    @staticmethod
    def _extract_error_message(body: Any) -> str | None:
        """Return `error.message` if the body is a structured error."""
        if not isinstance(body, dict) or body.get("error") is None:
            return None
        try:
            return ErrorResponse.model_validate(body).error.message
        except ValidationError:
            return None

    @staticmethod
    def _validate(model: type[BaseModel], body: Any) -> Any:
        try:
            return model.model_validate(body)
        except ValidationError as e:
            logger.error("Malformed response for %s: %s", model.__name__, e)
            raise MalformedResponseError(
                f"Malformed {model.__name__}: {e.error_count()} validation error(s)"
            ) from e

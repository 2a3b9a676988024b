"""Request and response models for the OpenAI-compatible HTTP API."""

from typing import Literal

from pydantic import BaseModel, Field


class RequestMessage(BaseModel):
    """Transcript entry in the request body."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of POST /chat/completions."""

    model: str
    messages: list[RequestMessage]
    max_tokens: int | None = Field(default=None, gt=0)


class ResponseMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str


class Choice(BaseModel):
    message: ResponseMessage


class Usage(BaseModel):
    total_tokens: int = Field(ge=0)


class ChatCompletionResponse(BaseModel):
    """Successful response of POST /chat/completions.

    Only the fields used by the bot are modelled; the first choice's
    content and the total token usage are required.
    """

    choices: list[Choice] = Field(min_length=1)
    usage: Usage


class ImageGenerationRequest(BaseModel):
    """Body of POST /images/generations."""

    prompt: str
    n: int = 1
    size: str = "1024x1024"


class ImageData(BaseModel):
    url: str


class ImageGenerationResponse(BaseModel):
    data: list[ImageData] = Field(min_length=1)


class ErrorDetail(BaseModel):
    message: str
    type: str | None = None
    code: str | int | None = None


class ErrorResponse(BaseModel):
    """Structured error body returned by the provider."""

    error: ErrorDetail

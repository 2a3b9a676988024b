"""Remote API exceptions."""


class RemoteError(Exception):
    """Base exception for remote API errors."""


class TransportError(RemoteError):
    """The request did not produce a usable HTTP response.

    Network failures, timeouts and non-2xx responses without a structured
    error body.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RemoteApiError(RemoteError):
    """The provider returned a structured `{"error": {"message": ...}}` body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_too_long(self) -> bool:
        """Whether the provider rejected the input for its length."""
        lowered = self.message.lower()
        return "maximum context length" in lowered or "is too long" in lowered

    @property
    def is_rate_limited(self) -> bool:
        return "rate limit" in self.message.lower()


class RemoteAuthenticationError(RemoteApiError):
    """Authentication error (invalid API key, etc.). Not recoverable."""


class MalformedResponseError(RemoteError):
    """A successful response is missing required fields."""

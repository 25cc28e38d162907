"""Structured exceptions for the Aiven API client."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from aiven_rest.errors.models import ErrorDetail


class AivenError(Exception):
    """Base exception for everything raised by this library."""

    pass


class ConfigurationError(AivenError):
    """Client was configured or called with unusable settings."""

    pass


class RequestEncodingError(AivenError):
    """Request body could not be serialized to JSON. Nothing was sent."""

    pass


class TransportError(AivenError):
    """The HTTP request could not be completed, even after retries."""

    pass


class DecodeError(AivenError):
    """Response body is not a valid JSON envelope."""

    pass


class AuthenticationError(AivenError):
    """The authorization exchange failed while building a client."""

    pass


class APIError(AivenError):
    """Error reported by the Aiven API.

    Raised for 4xx/5xx responses (``message`` is the raw body) and for
    envelopes that embed an error in an otherwise successful response.

    Attributes:
        message: Human readable message.
        status: HTTP status code, or the status embedded in the envelope.
        response: The HTTP response, when the error came from one.
        errors: Error entries parsed from a JSON error body.
    """

    def __init__(
        self,
        message: str,
        status: int,
        response: "httpx.Response | None" = None,
        errors: "list[ErrorDetail] | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response
        self.errors = errors if errors is not None else []

    def __str__(self) -> str:
        return f"{self.status}: {self.message}"


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, status: int, retry_after: int | None = None, **kwargs):
        super().__init__(message, status, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass

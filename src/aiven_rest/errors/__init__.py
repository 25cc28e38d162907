"""Error types and status classification for the Aiven API client."""

from aiven_rest.errors.exceptions import (
    AivenError,
    APIError,
    AuthenticationError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RequestEncodingError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from aiven_rest.errors.handler import raise_for_status
from aiven_rest.errors.models import ErrorDetail

__all__ = [
    "APIError",
    "AivenError",
    "AuthenticationError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "DecodeError",
    "ErrorDetail",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "RequestEncodingError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "raise_for_status",
]

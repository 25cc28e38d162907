"""Aiven REST client - authenticated, versioned requests against the Aiven API.

This library provides the request pipeline that resource-specific wrappers
build on:
- Client construction from composable options, with token or user auth
- Retrying httpx transport with fixed backoff and Retry-After support
- ``/v1`` and ``/v2`` endpoint routing
- Status classification into structured errors and envelope decoding

Example:
    ```python
    from aiven_rest import AivenClient, check_api_response, with_token_auth

    with AivenClient(with_token_auth("my-token")) as client:
        envelope = check_api_response(client.get("/project"))
        print(envelope.extra["projects"])
    ```
"""

from aiven_rest._version import __version__
from aiven_rest.client import AivenClient, build_path
from aiven_rest.config import (
    ClientOptions,
    Option,
    with_api_url,
    with_mfa_auth,
    with_retries,
    with_timeout,
    with_token_auth,
    with_transport,
    with_user_agent,
    with_user_auth,
)
from aiven_rest.errors import (
    AivenError,
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    RequestEncodingError,
    TransportError,
)
from aiven_rest.response import APIResponse, check_api_response

__all__ = [
    "APIError",
    "APIResponse",
    "AivenClient",
    "AivenError",
    "AuthenticationError",
    "ClientOptions",
    "ConfigurationError",
    "DecodeError",
    "NotFoundError",
    "Option",
    "RequestEncodingError",
    "TransportError",
    "__version__",
    "build_path",
    "check_api_response",
    "with_api_url",
    "with_mfa_auth",
    "with_retries",
    "with_timeout",
    "with_token_auth",
    "with_transport",
    "with_user_agent",
    "with_user_auth",
]

"""Client configuration and the options that build it.

``AivenClient`` accepts a sequence of options, each a callable that edits a
:class:`ClientOptions`. They are applied in order over the defaults, so the
last option touching a field wins. The three auth options all set
``auth_method`` and therefore replace one another.

Example:
    ```python
    from aiven_rest import AivenClient
    from aiven_rest.config import with_api_url, with_retries, with_user_auth

    client = AivenClient(
        with_user_auth("jane@example.com", "hunter2"),
        with_api_url("https://api.aiven.io"),
        with_retries(5, 0.5),
    )
    ```
"""

from collections.abc import Callable
from dataclasses import dataclass

import httpx

from aiven_rest._version import __version__
from aiven_rest.auth.credentials import DEFAULT_API_URL
from aiven_rest.auth.methods import AuthMethod, TokenAuth, UserAuth
from aiven_rest.errors.exceptions import ConfigurationError

DEFAULT_USER_AGENT = f"aiven-rest-client/{__version__}"

DEFAULT_RETRY_COUNT = 2

DEFAULT_RETRY_BACKOFF = 1.0

DEFAULT_TIMEOUT = 30.0


@dataclass
class ClientOptions:
    """Settings an :class:`~aiven_rest.client.AivenClient` is built from.

    Attributes:
        api_url: Base URL; ``/v1`` or ``/v2`` and the request path are appended.
        user_agent: Sent as the User-Agent header.
        auth_method: How the client obtains its token. Required.
        retry_count: Retries after the first attempt.
        retry_backoff: Seconds to wait between attempts.
        transport: Underlying transport. A new ``httpx.HTTPTransport`` per
            client when None.
        timeout: httpx timeout for each attempt.
    """

    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    auth_method: AuthMethod | None = None
    retry_count: int = DEFAULT_RETRY_COUNT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    transport: httpx.BaseTransport | None = None
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT


Option = Callable[[ClientOptions], None]


def apply_options(*options: Option) -> ClientOptions:
    """Apply ``options`` in order over the defaults."""
    params = ClientOptions()
    for option in options:
        option(params)
    return params


def with_transport(transport: httpx.BaseTransport) -> Option:
    """Send requests through ``transport``, e.g. one built with a custom CA bundle."""

    def option(params: ClientOptions) -> None:
        params.transport = transport

    return option


def with_api_url(url: str) -> Option:
    """Send requests to ``url`` instead of the production API, e.g. a test double."""

    def option(params: ClientOptions) -> None:
        params.api_url = url

    return option


def with_token_auth(token: str) -> Option:
    """Authorize with a pre-issued API token."""

    def option(params: ClientOptions) -> None:
        params.auth_method = TokenAuth(token)

    return option


def with_mfa_auth(email: str, password: str, otp: str) -> Option:
    """Exchange email, password and a one-time password for a token."""

    def option(params: ClientOptions) -> None:
        params.auth_method = UserAuth(email, password, otp)

    return option


def with_user_auth(email: str, password: str) -> Option:
    """Exchange email and password for a token."""

    def option(params: ClientOptions) -> None:
        params.auth_method = UserAuth(email, password)

    return option


def with_user_agent(user_agent: str) -> Option:
    """Replace the ``User-Agent`` header sent with every request."""

    def option(params: ClientOptions) -> None:
        params.user_agent = user_agent

    return option


def with_retries(retry_count: int, retry_backoff: float) -> Option:
    """Retry failed requests ``retry_count`` times, waiting ``retry_backoff`` seconds in between.

    Raises:
        ConfigurationError: Either value is negative.
    """
    if retry_count < 0:
        raise ConfigurationError(f"retry count must not be negative, got {retry_count}")
    if retry_backoff < 0:
        raise ConfigurationError(f"retry backoff must not be negative, got {retry_backoff}")

    def option(params: ClientOptions) -> None:
        params.retry_count = retry_count
        params.retry_backoff = retry_backoff

    return option


def with_timeout(timeout: float | httpx.Timeout) -> Option:
    """Per-request timeout in seconds, or an ``httpx.Timeout`` for finer control."""

    def option(params: ClientOptions) -> None:
        params.timeout = timeout

    return option

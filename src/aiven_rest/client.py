"""The Aiven API client."""

import dataclasses
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from aiven_rest.config import Option, apply_options
from aiven_rest.errors.exceptions import (
    AuthenticationError,
    ConfigurationError,
    RequestEncodingError,
    TransportError,
)
from aiven_rest.errors.handler import raise_for_status
from aiven_rest.transport.retry import RetryTransport

logger = logging.getLogger(__name__)

AUTH_SCHEME = "aivenv1"

API_VERSION_PREFIXES = {1: "/v1", 2: "/v2"}


class AivenClient:
    """Issues authorized requests against the Aiven API.

    Building a client runs the configured auth method once; with
    ``with_user_auth`` or ``with_mfa_auth`` that is a request to
    ``/v1/userauth``. The resulting token is kept for the client's lifetime.
    After construction the client holds no mutable state and can be shared
    between threads.

    Example:
        ```python
        from aiven_rest import AivenClient, with_token_auth

        with AivenClient(with_token_auth("my-token")) as client:
            body = client.get("/project")
        ```

    Raises:
        ConfigurationError: No auth method was configured.
        AuthenticationError: The auth method failed to produce a token.
    """

    def __init__(self, *options: Option) -> None:
        params = apply_options(*options)

        if params.auth_method is None:
            raise ConfigurationError("must provide an authorization method")

        self._api_url = params.api_url
        self._user_agent = params.user_agent
        self._token: str | None = None

        transport = RetryTransport(
            wrapped_transport=params.transport or httpx.HTTPTransport(),
            max_retries=params.retry_count,
            retry_wait_min=params.retry_backoff,
            retry_wait_max=params.retry_backoff,
        )
        self._http = httpx.Client(transport=transport, timeout=params.timeout)

        try:
            token = params.auth_method.token(self)
        except Exception as e:
            self._http.close()
            raise AuthenticationError(f"unable to authorize client: {e}") from e

        if not token:
            self._http.close()
            raise AuthenticationError("unable to authorize client: empty token")

        self._token = token
        logger.debug(f"Authorized client for {self._api_url} using {type(params.auth_method).__name__}")

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AivenClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get(self, path: str, body: Any = None) -> bytes:
        return self.request("GET", path, body, api_version=1)

    def put(self, path: str, body: Any = None) -> bytes:
        return self.request("PUT", path, body, api_version=1)

    def post(self, path: str, body: Any = None) -> bytes:
        return self.request("POST", path, body, api_version=1)

    def delete(self, path: str, body: Any = None) -> bytes:
        return self.request("DELETE", path, body, api_version=1)

    def get_v2(self, path: str, body: Any = None) -> bytes:
        return self.request("GET", path, body, api_version=2)

    def put_v2(self, path: str, body: Any = None) -> bytes:
        return self.request("PUT", path, body, api_version=2)

    def post_v2(self, path: str, body: Any = None) -> bytes:
        return self.request("POST", path, body, api_version=2)

    def delete_v2(self, path: str, body: Any = None) -> bytes:
        return self.request("DELETE", path, body, api_version=2)

    def request(self, method: str, path: str, body: Any = None, api_version: int = 1) -> bytes:
        """Send a request and return the raw response body.

        Args:
            method: HTTP method.
            path: Path below the version prefix, e.g. ``/project/foo``.
            body: JSON-serializable payload, or a dataclass instance. None
                sends an empty body.
            api_version: 1 or 2, selecting ``/v1`` or ``/v2``.

        Returns:
            The body of a 2xx response, unaltered.

        Raises:
            RequestEncodingError: ``body`` cannot be serialized. Nothing is sent.
            ConfigurationError: ``api_version`` is not supported, or the
                API URL or token cannot form a valid request.
            TransportError: The request failed at the network level after retries.
            APIError: The API answered with a non-2xx status.
        """
        content = _encode_body(body)
        url = self._endpoint(path, api_version)

        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
        }
        # Only the /userauth exchange runs before a token exists
        if self._token is not None:
            headers["Authorization"] = f"{AUTH_SCHEME} {self._token}"

        try:
            request = self._http.build_request(method, url, content=content, headers=headers)
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            # Malformed api_url, or a token that cannot go into a header
            raise ConfigurationError(f"unable to build http request: {e}") from e

        logger.debug(f"{method} {url}")

        try:
            # Reads the whole body and closes the response
            response = self._http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(f"unable to perform http request: {e}") from e

        raise_for_status(response)
        return response.content

    def _endpoint(self, path: str, api_version: int) -> str:
        prefix = API_VERSION_PREFIXES.get(api_version)
        if prefix is None:
            raise ConfigurationError(f"Aiven API version `{api_version}` is not supported")
        return self._api_url + prefix + path


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None

    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        body = dataclasses.asdict(body)

    try:
        return json.dumps(body, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestEncodingError(f"unable to marshal request body: {e}") from e


def build_path(*parts: str) -> str:
    """Join URL-escaped path segments: ``build_path("project", "a b")`` is ``/project/a%20b``."""
    return "".join("/" + quote(str(part), safe="") for part in parts)

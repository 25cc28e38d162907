"""Testing utilities for code built on the Aiven API client.

``RecordingTransport`` is an ``httpx.MockTransport`` that remembers every
request it served, which makes it easy to assert how many calls were made
and what they carried.

Example:
    ```python
    from aiven_rest import AivenClient, with_token_auth, with_transport
    from aiven_rest.testing import RecordingTransport, json_response

    transport = RecordingTransport(lambda request: json_response(200, {"projects": []}))
    client = AivenClient(with_token_auth("abc123"), with_transport(transport))

    client.get("/project")
    assert transport.call_count == 1
    assert transport.requests[0].headers["Authorization"] == "aivenv1 abc123"
    ```
"""

import json
from collections.abc import Callable
from typing import Any

import httpx

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records the requests it receives.

    Args:
        handler: Builds the response for a request. May raise
            ``httpx.TransportError`` subclasses to simulate network failures.
    """

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> list[Any]:
        """Decoded JSON bodies of the recorded requests; None for empty bodies."""
        return [json.loads(r.content) if r.content else None for r in self.requests]


def json_response(status_code: int, data: Any, headers: dict[str, str] | None = None) -> httpx.Response:
    """Build a response whose body is ``data`` encoded as JSON."""
    return httpx.Response(status_code, json=data, headers=headers)


def failing_handler(failures: int, then: Handler) -> Handler:
    """Handler that raises ``httpx.ConnectError`` ``failures`` times before delegating to ``then``."""
    remaining = failures

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal remaining
        if remaining > 0:
            remaining -= 1
            raise httpx.ConnectError("connection refused", request=request)
        return then(request)

    return handler


__all__ = ["Handler", "RecordingTransport", "failing_handler", "json_response"]

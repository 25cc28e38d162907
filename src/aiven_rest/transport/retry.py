"""Retry transport for the Aiven API client.

``RetryTransport`` wraps any ``httpx.BaseTransport`` and re-sends a request
when the connection fails or the API answers with a retryable status
(429 and 5xx other than 501).

The wait between attempts grows as ``retry_wait_min * 2 ** (attempt - 1)``
and is capped at ``retry_wait_max``; ``AivenClient`` passes the same value for
both, which gives a fixed wait. A ``Retry-After`` header on 429 and 503
responses takes precedence over the computed wait.

```python
import httpx

from aiven_rest.transport.retry import IDEMPOTENT_METHODS, RetryTransport

transport = RetryTransport(
    wrapped_transport=httpx.HTTPTransport(),
    max_retries=3,
    retry_wait_min=0.5,
    retry_wait_max=4.0,
    retry_methods=IDEMPOTENT_METHODS,  # never re-send POST
)

with httpx.Client(transport=transport) as client:
    response = client.get("https://api.aiven.io/v1/project")
```
"""

import logging
import ssl
import time
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

logger = logging.getLogger(__name__)

# Idempotent HTTP methods (per RFC 7231)
IDEMPOTENT_METHODS: frozenset[str] = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

ALL_METHODS: frozenset[str] = IDEMPOTENT_METHODS | frozenset(["POST", "PATCH"])

# Statuses whose Retry-After header is honoured
RETRY_AFTER_STATUS_CODES: frozenset[int] = frozenset([429, 503])


class RetryTransport(httpx.BaseTransport):
    """Transport that retries connection failures and retryable statuses.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Retries after the first attempt, so at most
            ``max_retries + 1`` requests are sent (default: 2)
        retry_wait_min: Wait before the first retry, in seconds (default: 1.0)
        retry_wait_max: Upper bound for the computed wait (default: 1.0)
        max_backoff: Upper bound for waits taken from Retry-After (default: 60)
        retry_methods: Methods eligible for retry (default: all of them)
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.BaseTransport,
        max_retries: int = 2,
        retry_wait_min: float = 1.0,
        retry_wait_max: float = 1.0,
        max_backoff: float = 60.0,
        retry_methods: frozenset[str] | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.retry_wait_min = retry_wait_min
        self.retry_wait_max = max(retry_wait_min, retry_wait_max)
        self.max_backoff = max_backoff
        self.retry_methods = retry_methods if retry_methods is not None else ALL_METHODS

    def __enter__(self):
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type=None, exc_val=None, exc_tb=None):
        self._wrapped_transport.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying until it succeeds or attempts run out.

        Returns:
            The first non-retryable response, or the last response once
            retries are exhausted.

        Raises:
            httpx.TransportError: The last connection failure when every
                attempt failed at the transport level.
        """
        retries = 0

        while True:
            try:
                response = self._wrapped_transport.handle_request(request)
            except httpx.TransportError as e:
                if not self._should_retry_error(request, e, retries):
                    raise

                retries += 1
                delay = self._calculate_backoff_delay(retries)
                logger.warning(
                    f"Request {request.method} {request.url} failed with {e!r}, "
                    f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
                )
                time.sleep(delay)
                continue

            if not self._should_retry_response(request, response, retries):
                return response

            retries += 1
            delay = self._retry_after_delay(response)
            if delay is None:
                delay = self._calculate_backoff_delay(retries)

            logger.warning(
                f"Request {request.method} {request.url} failed with {response.status_code}, "
                f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
            )

            # The discarded response still holds a connection
            response.close()
            time.sleep(delay)

    def _should_retry_error(self, request: httpx.Request, error: httpx.TransportError, current_retries: int) -> bool:
        if current_retries >= self.max_retries:
            return False
        if request.method not in self.retry_methods:
            return False
        # Unsupported protocols and untrusted certificates fail the same way every time
        if isinstance(error, httpx.UnsupportedProtocol):
            return False
        return not _is_certificate_error(error)

    def _should_retry_response(self, request: httpx.Request, response: httpx.Response, current_retries: int) -> bool:
        if current_retries >= self.max_retries:
            return False
        if request.method not in self.retry_methods:
            return False
        return is_retryable_status(response.status_code)

    def _retry_after_delay(self, response: httpx.Response) -> float | None:
        """Parse Retry-After from 429/503 responses.

        Supports both formats:
        - Delay-seconds: "120"
        - HTTP-date: "Wed, 21 Oct 2015 07:28:00 GMT"

        Returns:
            Delay in seconds capped at ``max_backoff``, or None if the header
            is missing, invalid, or in the past
        """
        if response.status_code not in RETRY_AFTER_STATUS_CODES:
            return None

        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None

        try:
            delay = float(int(retry_after))
        except ValueError:
            try:
                retry_date = parsedate_to_datetime(retry_after)
                delay = (retry_date - datetime.now(UTC)).total_seconds()
            except (ValueError, TypeError):
                return None

        if delay < 0:
            return None
        return min(delay, self.max_backoff)

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Wait before retry ``retry_number`` (1-indexed), capped at retry_wait_max."""
        delay = self.retry_wait_min * (2 ** (retry_number - 1))
        return min(delay, self.retry_wait_max)


def is_retryable_status(status_code: int) -> bool:
    """429 and every 5xx except 501 Not Implemented are worth another try."""
    if status_code == 429:
        return True
    return 500 <= status_code < 600 and status_code != 501


def _is_certificate_error(error: BaseException) -> bool:
    # httpx wraps the ssl error in its own and httpcore's exceptions
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False

"""Transport layer for the Aiven API client.

Transports wrap httpx's ``HTTPTransport`` (or any other ``httpx.BaseTransport``,
such as one configured with a custom CA bundle) to add retry behaviour.

Example:
    ```python
    import httpx

    from aiven_rest.transport import RetryTransport

    transport = RetryTransport(wrapped_transport=httpx.HTTPTransport(verify="/etc/aiven/ca.pem"))
    ```
"""

from aiven_rest.transport.retry import (
    ALL_METHODS,
    IDEMPOTENT_METHODS,
    RetryTransport,
    is_retryable_status,
)

__all__ = [
    "ALL_METHODS",
    "IDEMPOTENT_METHODS",
    "RetryTransport",
    "is_retryable_status",
]

"""Status classification for Aiven API responses."""

import httpx

from aiven_rest.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from aiven_rest.errors.models import ErrorDetail

EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def raise_for_status(response: httpx.Response) -> None:
    """Raise the matching APIError for anything that is not a 2xx response.

    The response body must already be read. For 4xx and 5xx responses the
    exception message is the raw body, left undecoded so that callers can
    interpret it; any Aiven ``errors`` entries are parsed alongside.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    body = response.text

    if not 400 <= status < 600:
        # 1xx, 3xx or something stranger
        raise APIError(
            f"unexpected status code, also: {body}",
            status,
            response=response,
        )

    if status in EXCEPTION_MAP:
        exc_class = EXCEPTION_MAP[status]
    elif status < 500:
        exc_class = ClientError
    else:
        exc_class = ServerError

    errors = ErrorDetail.list_from_body(response.content)

    if exc_class is RateLimitError:
        raise RateLimitError(
            body,
            status,
            retry_after=_parse_retry_after(response),
            response=response,
            errors=errors,
        )

    raise exc_class(body, status, response=response, errors=errors)


def _parse_retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None

"""Decoding of Aiven API response envelopes.

Every Aiven response body is a JSON object. Besides resource data it may
carry an ``errors`` array and a ``message``; some endpoints report a logical
failure through ``errors`` while answering with a 2xx status.

Resource envelopes subclass :class:`APIResponse`:

```python
from dataclasses import dataclass, field

from aiven_rest.response import APIResponse, check_api_response


@dataclass
class ProjectListResponse(APIResponse):
    projects: list[dict] = field(default_factory=list)


rsp = check_api_response(client.get("/project"), ProjectListResponse)
```
"""

import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, Self, TypeVar

from aiven_rest.errors.exceptions import APIError, DecodeError
from aiven_rest.errors.models import ErrorDetail

_ENVELOPE_FIELDS = frozenset(["errors", "message", "extra"])


@dataclass
class APIResponse:
    """Fields shared by every Aiven response.

    Attributes:
        errors: Errors embedded in the body.
        message: Informational message, present on many successful responses.
        extra: Keys the envelope type does not declare.
    """

    errors: list[ErrorDetail] = field(default_factory=list)
    message: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        names = {f.name for f in dataclasses.fields(cls) if f.init}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}

        for key, value in data.items():
            if key == "errors":
                if isinstance(value, list):
                    kwargs["errors"] = [ErrorDetail.from_dict(e) for e in value if isinstance(e, dict)]
            elif key in names and key not in _ENVELOPE_FIELDS:
                kwargs[key] = value
            elif key == "message":
                kwargs["message"] = value
            else:
                extra[key] = value

        return cls(extra=extra, **kwargs)

    def get_error(self) -> APIError | None:
        """Return the first embedded error that has a message, if any."""
        for detail in self.errors:
            if detail.message:
                return APIError(detail.message, detail.status, errors=list(self.errors))
        return None


ResponseT = TypeVar("ResponseT", bound=APIResponse)


def decode_json(data: bytes | str) -> dict[str, Any]:
    """Decode a response body into a JSON object.

    Raises:
        DecodeError: The body is not JSON, or its top level is not an object.
    """
    try:
        decoded = json.loads(data)
    except ValueError as e:
        raise DecodeError(f"unable to decode response body: {e}") from e

    if not isinstance(decoded, dict):
        raise DecodeError(f"expected a JSON object, got {type(decoded).__name__}")
    return decoded


def check_api_response(data: bytes | str, shape: type[ResponseT] = APIResponse) -> ResponseT:
    """Decode ``data`` into ``shape`` and surface embedded API errors.

    Args:
        data: Raw response body, as returned by ``AivenClient.request``.
        shape: An :class:`APIResponse` subclass describing the payload.

    Returns:
        The populated envelope.

    Raises:
        DecodeError: The body is not a JSON object, or does not fit ``shape``.
        APIError: The envelope carries an error entry with a non-empty message.
    """
    decoded = decode_json(data)

    try:
        envelope = shape.from_dict(decoded)
    except TypeError as e:
        raise DecodeError(f"unable to decode response into {shape.__name__}: {e}") from e

    error = envelope.get_error()
    if error is not None:
        raise error
    return envelope

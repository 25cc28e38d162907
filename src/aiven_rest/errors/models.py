"""Error entries embedded in Aiven API responses."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorDetail:
    """One entry of the ``errors`` array returned by the Aiven API.

    Example body:
        ```json
        {"errors": [{"message": "Project does not exist", "more_info": "https://...", "status": 404}],
         "message": "Project does not exist"}
        ```
    """

    message: str = ""
    status: int = 0
    more_info: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorDetail":
        """Build an entry from a decoded JSON object, ignoring unknown keys."""
        status = data.get("status")
        return cls(
            message=str(data.get("message") or ""),
            status=status if isinstance(status, int) else 0,
            more_info=data.get("more_info"),
        )

    @classmethod
    def list_from_body(cls, body: bytes | str) -> "list[ErrorDetail]":
        """Parse the ``errors`` array out of a raw response body.

        Returns an empty list when the body is not JSON or does not follow
        the Aiven error shape.
        """
        try:
            data = json.loads(body)
        except (ValueError, TypeError):
            return []

        if not isinstance(data, dict):
            return []

        entries = data.get("errors")
        if not isinstance(entries, list):
            return []

        return [cls.from_dict(entry) for entry in entries if isinstance(entry, dict)]

    def __str__(self) -> str:
        if self.more_info:
            return f"{self.message} ({self.more_info})"
        return self.message

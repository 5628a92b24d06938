"""TradeStation Client Exceptions.

Two failure kinds reach callers: the upstream refused or never answered
(RequestFailedError), or it answered 2xx with a body the endpoint cannot
use (MalformedResponseError). Neither is retried internally.
"""

from typing import Any, Optional


class TradeStationError(Exception):
    """Base exception for all TradeStation client errors."""

    def __init__(self, message: str, endpoint: str = ""):
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint


class RequestFailedError(TradeStationError):
    """Raised on a non-2xx status or a transport failure.

    Attributes:
        status_code: HTTP status, or None when no response was received.
        endpoint: Name of the endpoint descriptor that was executed.
        body: Decoded upstream error body (dict when JSON, else text).
    """

    def __init__(
        self,
        endpoint: str,
        status_code: Optional[int] = None,
        body: Any = None,
        message: str = "",
    ):
        if not message:
            if status_code is None:
                message = f"{endpoint}: request failed before a response was received"
            else:
                message = f"{endpoint}: HTTP {status_code}"
            upstream = _upstream_message(body)
            if upstream:
                message = f"{message} ({upstream})"
        super().__init__(message, endpoint)
        self.status_code = status_code
        self.body = body

    @property
    def error(self) -> Optional[str]:
        """Upstream error code, e.g. ``BadRequest``."""
        if isinstance(self.body, dict):
            return self.body.get("Error")
        return None

    @property
    def upstream_message(self) -> Optional[str]:
        """Upstream human-readable message, e.g. a list-limit violation."""
        if isinstance(self.body, dict):
            return self.body.get("Message")
        return None


class MalformedResponseError(TradeStationError):
    """Raised when a 2xx response lacks the field the endpoint unwraps."""

    def __init__(self, endpoint: str, field: Optional[str] = None, body: Any = None):
        if field:
            message = f"{endpoint}: response is missing expected field {field!r}"
        else:
            message = f"{endpoint}: response body is not valid JSON"
        super().__init__(message, endpoint)
        self.field = field
        self.body = body


def _upstream_message(body: Any) -> str:
    if isinstance(body, dict):
        parts = [str(body[k]) for k in ("Error", "Message") if body.get(k)]
        return ": ".join(parts)
    return ""

"""Request Observation.

The dispatcher reports every completed call to an optional observer and
emits no log output itself. LoggingObserver is the stock observer that
routes those reports into the structured logging setup.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlsplit

from src.logging_config.config import DEFAULT_LOGGING_CONFIG, LoggingConfig


@dataclass(frozen=True)
class RequestEvent:
    """Outcome of one dispatched request."""
    endpoint: str
    method: str
    url: str
    status_code: Optional[int] = None
    elapsed_ms: float = 0.0
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path


RequestObserver = Callable[[RequestEvent], None]


class LoggingObserver:
    """Observer that logs request outcomes.

    Successful calls log at DEBUG, calls slower than the configured
    threshold at WARNING, failures at ERROR. Query strings are left out
    of the logged path.

    Example:
        dispatcher = RequestDispatcher(session, observer=LoggingObserver())
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        config: Optional[LoggingConfig] = None,
    ):
        self.logger = logger or logging.getLogger("src.tradestation.requests")
        self.config = config or DEFAULT_LOGGING_CONFIG

    def __call__(self, event: RequestEvent) -> None:
        extra = {
            "endpoint": event.endpoint,
            "method": event.method,
            "path": event.path,
            "status_code": event.status_code,
            "duration_ms": round(event.elapsed_ms, 2),
        }

        if event.error is not None:
            self.logger.error(
                f"{event.method} {event.path} failed: {event.error}", extra=extra
            )
        elif event.elapsed_ms >= self.config.slow_threshold_ms:
            self.logger.warning(
                f"Slow request: {event.method} {event.path} took {event.elapsed_ms:.0f}ms",
                extra=extra,
            )
        else:
            self.logger.debug(
                f"{event.method} {event.path} -> {event.status_code}", extra=extra
            )

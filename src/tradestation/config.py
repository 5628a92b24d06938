"""Session and API domain configuration.

A Session is the only mutable-by-replacement state of a client: the bearer
token plus the API root. Token refresh happens outside this package; the
caller swaps in a new Session and subsequent requests pick it up.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

DEFAULT_BASE_URL = "https://api.tradestation.com"

STREAM_MEDIA_TYPE = "application/vnd.tradestation.streams.v2+json"


class ApiDomain(str, Enum):
    """Base path of each TradeStation API family."""
    BROKERAGE = "v3/brokerage"
    MARKET_DATA = "v3/marketdata"
    ORDER_EXECUTION = "v3/orderexecution"
    SYMBOLS = "v2/data/symbols"
    STREAM_V2 = "v2/stream"


@dataclass(frozen=True)
class Session:
    """Bearer token and API root for one client instance."""
    token: str
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        if not self.token:
            raise ValueError("A bearer token is required")
        if not self.base_url:
            raise ValueError("A base URL is required")

    def __repr__(self) -> str:
        return f"Session(token='***', base_url={self.base_url!r})"

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"

    def url_for(self, domain: ApiDomain) -> str:
        return f"{self.base_url.rstrip('/')}/{domain.value}"

    def with_token(self, token: str) -> "Session":
        """Return a copy of this session carrying a refreshed token."""
        return replace(self, token=token)

    @classmethod
    def from_settings(cls, settings: Optional[Any] = None) -> "Session":
        """Build a session from environment-backed settings."""
        if settings is None:
            from src.settings import get_settings
            settings = get_settings()
        return cls(token=settings.access_token, base_url=settings.base_url)

"""TradeStation API Client.

One object per session: owns the dispatcher and exposes the endpoint
groups as attributes.
"""

import logging
from typing import Any, Optional

import httpx

from src.tradestation.accounts import Accounts
from src.tradestation.config import Session
from src.tradestation.dispatcher import RequestDispatcher
from src.tradestation.market_data import MarketData
from src.tradestation.observer import RequestObserver
from src.tradestation.orders import Orders
from src.tradestation.symbols import Symbols

logger = logging.getLogger(__name__)


class TradeStationClient:
    """TradeStation REST API client.

    Example:
        async with TradeStationClient(Session(token="...")) as client:
            accounts = await client.accounts.get_accounts()
            strikes = await client.market_data.get_option_strikes("AAPL")
    """

    def __init__(
        self,
        session: Session,
        http_client: Optional[httpx.AsyncClient] = None,
        request_timeout: float = 30.0,
        observer: Optional[RequestObserver] = None,
    ):
        self._dispatcher = RequestDispatcher(
            session,
            http_client=http_client,
            request_timeout=request_timeout,
            observer=observer,
        )
        self.accounts = Accounts(self._dispatcher)
        self.orders = Orders(self._dispatcher)
        self.market_data = MarketData(self._dispatcher)
        self.symbols = Symbols(self._dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Any] = None,
        observer: Optional[RequestObserver] = None,
    ) -> "TradeStationClient":
        """Build a client from ``TRADESTATION_*`` environment settings."""
        if settings is None:
            from src.settings import get_settings
            settings = get_settings()
        return cls(
            Session.from_settings(settings),
            request_timeout=settings.request_timeout,
            observer=observer,
        )

    @property
    def session(self) -> Session:
        return self._dispatcher.session

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    def replace_session(self, session: Session) -> None:
        """Install a refreshed session for all subsequent requests."""
        self._dispatcher.session = session
        logger.debug("TradeStation session replaced")

    def update_token(self, token: str) -> None:
        self.replace_session(self.session.with_token(token))

    async def disconnect(self) -> None:
        """Release the HTTP connection pool."""
        await self._dispatcher.aclose()

    async def __aenter__(self) -> "TradeStationClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

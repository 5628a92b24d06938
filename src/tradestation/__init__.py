"""TradeStation Brokerage API Client.

Async wrappers over the TradeStation REST API (accounts, order execution,
market data, symbol lookup). Every endpoint is a static descriptor run
through one RequestDispatcher; streaming endpoints return a RecordStream.

Example:
    from src.tradestation import Session, TradeStationClient

    async with TradeStationClient(Session(token="ACCESS_TOKEN")) as client:
        positions = await client.accounts.get_positions("123456782")
        async with await client.market_data.stream_quote_changes("MSFT,AAPL") as quotes:
            async for quote in quotes:
                print(quote)
"""

from src.tradestation.accounts import Accounts
from src.tradestation.client import TradeStationClient
from src.tradestation.config import ApiDomain, Session, STREAM_MEDIA_TYPE
from src.tradestation.dispatcher import RequestDispatcher
from src.tradestation.endpoints import (
    ACCOUNTS,
    ALL_ENDPOINTS,
    MARKET_DATA,
    ORDERS,
    SYMBOLS,
    Endpoint,
    QueryParam,
)
from src.tradestation.exceptions import (
    MalformedResponseError,
    RequestFailedError,
    TradeStationError,
)
from src.tradestation.market_data import MarketData
from src.tradestation.observer import LoggingObserver, RequestEvent
from src.tradestation.orders import Orders
from src.tradestation.streaming import RecordStream, is_heartbeat, is_stream_status
from src.tradestation.symbols import Symbols

__all__ = [
    # Client
    "TradeStationClient",
    "Session",
    "ApiDomain",
    "STREAM_MEDIA_TYPE",
    # Dispatch
    "RequestDispatcher",
    "Endpoint",
    "QueryParam",
    "ACCOUNTS",
    "ORDERS",
    "MARKET_DATA",
    "SYMBOLS",
    "ALL_ENDPOINTS",
    # Endpoint groups
    "Accounts",
    "Orders",
    "MarketData",
    "Symbols",
    # Streaming
    "RecordStream",
    "is_heartbeat",
    "is_stream_status",
    # Observation
    "LoggingObserver",
    "RequestEvent",
    # Errors
    "TradeStationError",
    "RequestFailedError",
    "MalformedResponseError",
]

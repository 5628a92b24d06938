"""Endpoint Registry.

Static descriptor tables for every TradeStation endpoint the client wraps.
Defaults live here, not in method signatures, so they are defined once and
can be inspected and tested without issuing requests.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from src.tradestation.config import ApiDomain


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 timestamp, e.g. ``2024-05-01T14:30:00Z``."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class QueryParam:
    """One optional query-string parameter of an endpoint."""
    name: str
    wire: str = ""
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None

    def __post_init__(self):
        if not self.wire:
            object.__setattr__(self, "wire", self.name)

    def resolve(self, value: Any = None) -> Any:
        if value is not None:
            return value
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass(frozen=True)
class Endpoint:
    """Static description of one API endpoint.

    ``unwrap`` names the top-level response key returned to the caller;
    a tuple of keys returns a dict of those keys, None returns the body.
    """
    name: str
    domain: ApiDomain
    path: str
    method: str = "GET"
    unwrap: Union[None, str, tuple[str, ...]] = None
    stream: bool = False
    query: tuple[QueryParam, ...] = field(default_factory=tuple)

    @property
    def has_body(self) -> bool:
        return self.method in ("POST", "PUT")

    def param(self, name: str) -> QueryParam:
        for p in self.query:
            if p.name == name:
                return p
        raise KeyError(f"{self.name} has no query parameter {name!r}")


def _registry(*endpoints: Endpoint) -> dict[str, Endpoint]:
    return {e.name: e for e in endpoints}


# =====================================================================
# Accounts (brokerage)
# =====================================================================

ACCOUNTS = _registry(
    Endpoint("get_accounts", ApiDomain.BROKERAGE, "accounts", unwrap="Accounts"),
    Endpoint(
        "get_account_balances", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/balances", unwrap="Balances",
    ),
    Endpoint(
        "get_balances_bod", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/bodbalances", unwrap="BODBalances",
    ),
    Endpoint(
        "get_historical_orders", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/historicalorders",
        query=(
            QueryParam("since"),
            QueryParam("page_size", "pageSize", default=600),
            QueryParam("next_token", "nextToken"),
        ),
    ),
    Endpoint(
        "get_historical_orders_by_order_id", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/historicalorders/{order_ids}",
        query=(QueryParam("since"),),
    ),
    Endpoint(
        "get_orders", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/orders", unwrap="Orders",
        query=(
            QueryParam("page_size", "pageSize", default=600),
            QueryParam("next_token", "nextToken"),
        ),
    ),
    Endpoint(
        "get_orders_by_order_id", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/orders/{order_ids}", unwrap="Orders",
    ),
    Endpoint(
        "get_positions", ApiDomain.BROKERAGE,
        "accounts/{account_ids}/positions", unwrap="Positions",
        query=(QueryParam("symbol"),),
    ),
    Endpoint(
        "get_wallets", ApiDomain.BROKERAGE,
        "accounts/{account_id}/wallets", unwrap="Wallets",
    ),
    Endpoint(
        "stream_wallets", ApiDomain.BROKERAGE,
        "stream/accounts/{account_id}/wallets", stream=True,
    ),
    Endpoint(
        "stream_orders", ApiDomain.BROKERAGE,
        "stream/accounts/{account_ids}/orders", stream=True,
    ),
    Endpoint(
        "stream_orders_by_order_id", ApiDomain.BROKERAGE,
        "stream/accounts/{account_ids}/orders/{order_ids}", stream=True,
    ),
    Endpoint(
        "stream_positions", ApiDomain.BROKERAGE,
        "stream/accounts/{account_ids}/positions", stream=True,
        query=(QueryParam("changes", default=False),),
    ),
)


# =====================================================================
# Orders (order execution)
# =====================================================================

ORDERS = _registry(
    Endpoint(
        "confirm_order", ApiDomain.ORDER_EXECUTION, "orderconfirm",
        method="POST", unwrap="Confirmations",
    ),
    Endpoint(
        "confirm_group_order", ApiDomain.ORDER_EXECUTION, "ordergroupconfirm",
        method="POST", unwrap="OrderConfirmResponses",
    ),
    Endpoint(
        "place_group_order", ApiDomain.ORDER_EXECUTION, "ordergroups",
        method="POST", unwrap="Orders",
    ),
    Endpoint(
        "place_order", ApiDomain.ORDER_EXECUTION, "orders",
        method="POST", unwrap="Orders",
    ),
    Endpoint(
        "replace_order", ApiDomain.ORDER_EXECUTION, "orders/{order_id}",
        method="PUT",
    ),
    Endpoint(
        "get_activation_triggers", ApiDomain.ORDER_EXECUTION, "activationtriggers",
        unwrap="ActivationTriggers",
    ),
    Endpoint("get_routes", ApiDomain.ORDER_EXECUTION, "routes", unwrap="Routes"),
)


# =====================================================================
# Market data
# =====================================================================

_BAR_PARAMS = (
    QueryParam("interval", default="1"),
    QueryParam("unit", default="Daily"),
    QueryParam("barsback", default="1"),
)

_MAX_LEVELS = QueryParam("max_levels", "maxlevels", default=20)

MARKET_DATA = _registry(
    Endpoint(
        "get_bars", ApiDomain.MARKET_DATA, "barcharts/{symbol}",
        query=_BAR_PARAMS + (
            QueryParam("firstdate"),
            # Bars up to "now" unless the caller pins an end date.
            QueryParam("lastdate", default_factory=utc_now_iso),
            QueryParam("sessiontemplate"),
        ),
    ),
    Endpoint(
        "stream_bars", ApiDomain.MARKET_DATA, "stream/barcharts/{symbol}",
        stream=True,
        query=_BAR_PARAMS + (QueryParam("sessiontemplate"),),
    ),
    Endpoint(
        "get_crypto_symbol_names", ApiDomain.MARKET_DATA,
        "symbollists/cryptopairs/symbolnames", unwrap="SymbolNames",
    ),
    Endpoint("get_symbol_details", ApiDomain.MARKET_DATA, "symbols/{symbols}"),
    Endpoint(
        "get_option_expirations", ApiDomain.MARKET_DATA,
        "options/expirations/{underlying}", unwrap="Expirations",
        query=(QueryParam("strike_price", "strikePrice"),),
    ),
    Endpoint(
        "get_option_risk_reward", ApiDomain.MARKET_DATA, "options/riskreward",
        method="POST",
    ),
    Endpoint(
        "get_option_spread_types", ApiDomain.MARKET_DATA, "options/spreadtypes",
        unwrap="SpreadTypes",
    ),
    Endpoint(
        "get_option_strikes", ApiDomain.MARKET_DATA, "options/strikes/{underlying}",
        unwrap=("SpreadType", "Strikes"),
        query=(
            QueryParam("spread_type", "spreadType", default="Single"),
            QueryParam("strike_interval", "strikeInterval", default=1),
            QueryParam("expiration"),
            QueryParam("expiration2"),
        ),
    ),
    Endpoint(
        "stream_option_chain", ApiDomain.MARKET_DATA,
        "stream/options/chains/{underlying}", stream=True,
        query=(
            QueryParam("expiration"),
            QueryParam("expiration2"),
            QueryParam("strike_proximity", "strikeProximity", default=5),
            QueryParam("spread_type", "spreadType", default="Single"),
            QueryParam("risk_free_rate", "riskFreeRate"),
            QueryParam("price_center", "priceCenter"),
            QueryParam("strike_interval", "strikeInterval", default=1),
            QueryParam("enable_greeks", "enableGreeks", default=True),
            QueryParam("strike_range", "strikeRange", default="All"),
            QueryParam("option_type", "optionType", default="All"),
        ),
    ),
    Endpoint(
        "stream_option_quotes", ApiDomain.MARKET_DATA, "stream/options/quotes",
        stream=True,
        query=(
            QueryParam("symbol", "legs[0].Symbol"),
            QueryParam("ratio", "legs[0].Ratio", default=1),
            QueryParam("risk_free_rate", "riskFreeRate"),
            QueryParam("enable_greeks", "enableGreeks", default=True),
        ),
    ),
    Endpoint("get_quote_snapshots", ApiDomain.MARKET_DATA, "quotes/{symbols}"),
    Endpoint(
        "stream_quote_changes", ApiDomain.MARKET_DATA, "stream/quotes/{symbols}",
        stream=True,
    ),
    Endpoint(
        "stream_market_depth_quotes", ApiDomain.MARKET_DATA,
        "stream/marketdepth/quotes/{symbol}", stream=True, query=(_MAX_LEVELS,),
    ),
    Endpoint(
        "stream_market_depth_aggregates", ApiDomain.MARKET_DATA,
        "stream/marketdepth/aggregates/{symbol}", stream=True, query=(_MAX_LEVELS,),
    ),
    Endpoint(
        "stream_tick_bars", ApiDomain.STREAM_V2,
        "tickbars/{symbol}/{interval}/{bars_back}", stream=True,
    ),
)


# =====================================================================
# Symbols (v2 data)
# =====================================================================

SYMBOLS = _registry(
    Endpoint(
        "suggest_symbols", ApiDomain.SYMBOLS, "suggest/{text}",
        query=(QueryParam("top", "$top"), QueryParam("filter", "$filter")),
    ),
    Endpoint("search_symbols", ApiDomain.SYMBOLS, "search/{criteria}"),
)


ALL_ENDPOINTS: dict[str, Endpoint] = {**ACCOUNTS, **ORDERS, **MARKET_DATA, **SYMBOLS}

"""Market data endpoints: bars, quotes, options, market depth."""

from typing import Any, Optional, Union

from src.tradestation.base import EndpointGroup
from src.tradestation.endpoints import MARKET_DATA
from src.tradestation.streaming import RecordStream


class MarketData(EndpointGroup):
    """Market data endpoints (``/v3/marketdata``).

    Parameters left as None fall back to the defaults declared in the
    endpoint registry, or are omitted from the request when there is none.
    """

    endpoints = MARKET_DATA

    # -- Bars --------------------------------------------------------------

    async def get_bars(
        self,
        symbol: str,
        interval: Optional[str] = None,
        unit: Optional[str] = None,
        barsback: Optional[str] = None,
        firstdate: Optional[str] = None,
        lastdate: Optional[str] = None,
        sessiontemplate: Optional[str] = None,
    ) -> dict[str, Any]:
        """Fetch historical bars for a symbol.

        Args:
            symbol: A valid symbol, e.g. ``"MSFT"``.
            interval: Bar size in ``unit``s (default ``"1"``).
            unit: ``Minute``, ``Daily``, ``Weekly`` or ``Monthly`` (default ``"Daily"``).
            barsback: Number of bars back from ``lastdate`` (default ``"1"``).
            firstdate: First date, ``YYYY-MM-DD`` or ISO-8601.
            lastdate: Last date. Defaults to the current UTC time, taken when
                the request is built.
            sessiontemplate: US stock session template, e.g. ``USEQPreAndPost``.

        Returns:
            The whole response body (``{"Bars": [...]}``).
        """
        return await self._call(
            "get_bars",
            {"symbol": symbol},
            {
                "interval": interval,
                "unit": unit,
                "barsback": barsback,
                "firstdate": firstdate,
                "lastdate": lastdate,
                "sessiontemplate": sessiontemplate,
            },
        )

    async def stream_bars(
        self,
        symbol: str,
        interval: Optional[str] = None,
        unit: Optional[str] = None,
        barsback: Optional[str] = None,
        sessiontemplate: Optional[str] = None,
    ) -> RecordStream:
        """Stream bar updates; parameters default as in ``get_bars``."""
        return await self._call(
            "stream_bars",
            {"symbol": symbol},
            {
                "interval": interval,
                "unit": unit,
                "barsback": barsback,
                "sessiontemplate": sessiontemplate,
            },
        )

    async def stream_tick_bars(
        self, symbol: str, interval: Union[int, str], bars_back: Union[int, str]
    ) -> RecordStream:
        """Stream tick bars, ``interval`` ticks per bar (v2 stream API)."""
        return await self._call(
            "stream_tick_bars",
            {"symbol": symbol, "interval": interval, "bars_back": bars_back},
        )

    # -- Symbols & quotes --------------------------------------------------

    async def get_crypto_symbol_names(self) -> list[str]:
        """Crypto pair symbols quoted by TradeStation."""
        return await self._call("get_crypto_symbol_names")

    async def get_symbol_details(self, symbols: str) -> dict[str, Any]:
        """Symbol details for comma-separated ``symbols``; returns ``{Symbols, Errors}``."""
        return await self._call("get_symbol_details", {"symbols": symbols})

    async def get_quote_snapshots(self, symbols: str) -> dict[str, Any]:
        """Latest quote for each symbol; returns ``{Quotes, Errors}``."""
        return await self._call("get_quote_snapshots", {"symbols": symbols})

    async def stream_quote_changes(self, symbols: str) -> RecordStream:
        """Stream quote changes for comma-separated ``symbols``."""
        return await self._call("stream_quote_changes", {"symbols": symbols})

    async def stream_market_depth_quotes(
        self, symbol: str, max_levels: Optional[int] = None
    ) -> RecordStream:
        """Level 2 quotes per participant (default 20 levels)."""
        return await self._call(
            "stream_market_depth_quotes", {"symbol": symbol}, {"max_levels": max_levels}
        )

    async def stream_market_depth_aggregates(
        self, symbol: str, max_levels: Optional[int] = None
    ) -> RecordStream:
        """Level 2 quotes aggregated across participants (default 20 levels)."""
        return await self._call(
            "stream_market_depth_aggregates", {"symbol": symbol}, {"max_levels": max_levels}
        )

    # -- Options -----------------------------------------------------------

    async def get_option_expirations(
        self, underlying: str, strike_price: Optional[float] = None
    ) -> list[dict]:
        """Option expirations for ``underlying``, optionally at one strike."""
        return await self._call(
            "get_option_expirations",
            {"underlying": underlying},
            {"strike_price": strike_price},
        )

    async def get_option_risk_reward(self, analysis: dict[str, Any]) -> dict[str, Any]:
        """Risk vs. reward analysis for a prospective option trade."""
        return await self._call("get_option_risk_reward", body=analysis)

    async def get_option_spread_types(self) -> list[dict]:
        """Spread types accepted by the option endpoints."""
        return await self._call("get_option_spread_types")

    async def get_option_strikes(
        self,
        underlying: str,
        spread_type: Optional[str] = None,
        strike_interval: Optional[int] = None,
        expiration: Optional[str] = None,
        expiration2: Optional[str] = None,
    ) -> dict[str, Any]:
        """Available strikes for a spread type; returns ``{SpreadType, Strikes}``.

        ``spread_type`` defaults to ``"Single"`` and ``strike_interval`` to 1.
        ``expiration2`` is only meaningful for Calendar and Diagonal spreads.
        """
        return await self._call(
            "get_option_strikes",
            {"underlying": underlying},
            {
                "spread_type": spread_type,
                "strike_interval": strike_interval,
                "expiration": expiration,
                "expiration2": expiration2,
            },
        )

    async def stream_option_chain(
        self,
        underlying: str,
        expiration: Optional[str] = None,
        expiration2: Optional[str] = None,
        strike_proximity: Optional[int] = None,
        spread_type: Optional[str] = None,
        risk_free_rate: Optional[float] = None,
        price_center: Optional[float] = None,
        strike_interval: Optional[int] = None,
        enable_greeks: Optional[bool] = None,
        strike_range: Optional[str] = None,
        option_type: Optional[str] = None,
    ) -> RecordStream:
        """Stream an option chain for ``underlying``.

        Args:
            underlying: Symbol of the underlying security.
            expiration: Expiration date; upstream defaults to the next one.
            expiration2: Second expiration for Calendar and Diagonal spreads.
            strike_proximity: Spreads above and below the price center (default 5).
            spread_type: Spread type name (default ``"Single"``).
            risk_free_rate: Decimal rate; upstream defaults to ``$IRX.X``.
            price_center: Strike price center; upstream defaults to last price.
            strike_interval: Interval between strikes, >= 1 (default 1).
            enable_greeks: Include greeks (default True).
            strike_range: ``All``, ``ITM`` or ``OTM`` (default ``"All"``).
            option_type: ``All``, ``Call`` or ``Put`` (default ``"All"``).
        """
        return await self._call(
            "stream_option_chain",
            {"underlying": underlying},
            {
                "expiration": expiration,
                "expiration2": expiration2,
                "strike_proximity": strike_proximity,
                "spread_type": spread_type,
                "risk_free_rate": risk_free_rate,
                "price_center": price_center,
                "strike_interval": strike_interval,
                "enable_greeks": enable_greeks,
                "strike_range": strike_range,
                "option_type": option_type,
            },
        )

    async def stream_option_quotes(
        self,
        symbol: str,
        ratio: Optional[int] = None,
        risk_free_rate: Optional[float] = None,
        enable_greeks: Optional[bool] = None,
    ) -> RecordStream:
        """Stream quotes and greeks for a single-leg option spread.

        ``ratio`` is the leg's contract count relative to other legs;
        negative sells (default 1).
        """
        return await self._call(
            "stream_option_quotes",
            query_args={
                "symbol": symbol,
                "ratio": ratio,
                "risk_free_rate": risk_free_rate,
                "enable_greeks": enable_greeks,
            },
        )

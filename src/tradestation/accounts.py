"""Brokerage account endpoints: balances, orders, positions, wallets.

Account and order ID lists are passed as pre-joined comma-separated
strings, e.g. ``"61999124,68910124"``. The upstream list-size limits are
not checked here; a violation comes back as RequestFailedError.
"""

from typing import Any, Optional

from src.tradestation.base import EndpointGroup
from src.tradestation.endpoints import ACCOUNTS
from src.tradestation.streaming import RecordStream


class Accounts(EndpointGroup):
    """Brokerage account endpoints (``/v3/brokerage``)."""

    endpoints = ACCOUNTS

    async def get_accounts(self) -> list[dict]:
        """List the brokerage accounts available to the current user."""
        return await self._call("get_accounts")

    async def get_account_balances(self, account_ids: str) -> list[dict]:
        """Real-time balances for the given accounts."""
        return await self._call("get_account_balances", {"account_ids": account_ids})

    async def get_balances_bod(self, account_ids: str) -> list[dict]:
        """Beginning-of-day balances for the given accounts."""
        return await self._call("get_balances_bod", {"account_ids": account_ids})

    async def get_historical_orders(
        self,
        account_ids: str,
        since: str,
        page_size: Optional[int] = None,
        next_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Historical (non-open) orders, most recently closed first.

        Args:
            account_ids: Comma-separated account IDs.
            since: Lower bound date, ``YYYY-MM-DD``.
            page_size: Orders per page (default 600).
            next_token: Pagination token from a previous response.

        Returns:
            The whole response body, including ``NextToken`` when more
            pages remain.
        """
        return await self._call(
            "get_historical_orders",
            {"account_ids": account_ids},
            {"since": since, "page_size": page_size, "next_token": next_token},
        )

    async def get_historical_orders_by_order_id(
        self, account_ids: str, order_ids: str, since: str
    ) -> dict[str, Any]:
        """Historical orders for specific order IDs, closed since ``since``."""
        return await self._call(
            "get_historical_orders_by_order_id",
            {"account_ids": account_ids, "order_ids": order_ids},
            {"since": since},
        )

    async def get_orders(
        self,
        account_ids: str,
        page_size: Optional[int] = None,
        next_token: Optional[str] = None,
    ) -> list[dict]:
        """Today's orders and open orders for the given accounts."""
        return await self._call(
            "get_orders",
            {"account_ids": account_ids},
            {"page_size": page_size, "next_token": next_token},
        )

    async def get_orders_by_order_id(self, account_ids: str, order_ids: str) -> list[dict]:
        """Today's and open orders matching the given order IDs."""
        return await self._call(
            "get_orders_by_order_id",
            {"account_ids": account_ids, "order_ids": order_ids},
        )

    async def get_positions(self, account_ids: str, symbol: Optional[str] = None) -> list[dict]:
        """Positions for the given accounts, optionally filtered by symbol(s)."""
        return await self._call(
            "get_positions", {"account_ids": account_ids}, {"symbol": symbol}
        )

    async def get_wallets(self, account_id: str) -> list[dict]:
        """Wallets of a crypto account."""
        return await self._call("get_wallets", {"account_id": account_id})

    # -- Streams -----------------------------------------------------------

    async def stream_wallets(self, account_id: str) -> RecordStream:
        """Stream wallet balance updates for a crypto account."""
        return await self._call("stream_wallets", {"account_id": account_id})

    async def stream_orders(self, account_ids: str) -> RecordStream:
        """Stream order status updates for the given accounts."""
        return await self._call("stream_orders", {"account_ids": account_ids})

    async def stream_orders_by_order_id(self, account_ids: str, order_ids: str) -> RecordStream:
        """Stream status updates for specific orders."""
        return await self._call(
            "stream_orders_by_order_id",
            {"account_ids": account_ids, "order_ids": order_ids},
        )

    async def stream_positions(
        self, account_ids: str, changes: Optional[bool] = None
    ) -> RecordStream:
        """Stream positions; ``changes=True`` streams only updates (default False)."""
        return await self._call(
            "stream_positions", {"account_ids": account_ids}, {"changes": changes}
        )

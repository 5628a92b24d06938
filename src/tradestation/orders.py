"""Order execution endpoints.

Order payloads are sent verbatim as JSON in TradeStation's own schema;
nothing here validates or reshapes them.
"""

from typing import Any

from src.tradestation.base import EndpointGroup
from src.tradestation.endpoints import ORDERS


class Orders(EndpointGroup):
    """Order execution endpoints (``/v3/orderexecution``).

    Example:
        orders = await client.orders.place_order({
            "AccountID": "123456782",
            "Symbol": "MSFT",
            "Quantity": "10",
            "OrderType": "Market",
            "TradeAction": "BUY",
            "TimeInForce": {"Duration": "DAY"},
            "Route": "Intelligent",
        })
    """

    endpoints = ORDERS

    async def confirm_order(self, order: dict[str, Any]) -> list[dict]:
        """Estimate cost and commission of an order without placing it."""
        return await self._call("confirm_order", body=order)

    async def confirm_group_order(self, group_order: dict[str, Any]) -> list[dict]:
        """Estimate cost and commission of a group order without placing it."""
        return await self._call("confirm_group_order", body=group_order)

    async def place_group_order(self, group_order: dict[str, Any]) -> list[dict]:
        """Place an OCO/bracket group order."""
        return await self._call("place_group_order", body=group_order)

    async def place_order(self, order: dict[str, Any]) -> list[dict]:
        """Send a single order for execution."""
        return await self._call("place_order", body=order)

    async def replace_order(self, order_id: str, replacement: dict[str, Any]) -> dict[str, Any]:
        """Replace an active order; returns the whole response body."""
        return await self._call("replace_order", {"order_id": order_id}, body=replacement)

    async def get_activation_triggers(self) -> list[dict]:
        """Trigger methods usable with stop and activation rules."""
        return await self._call("get_activation_triggers")

    async def get_routes(self) -> list[dict]:
        """Routes a client may specify when posting an order."""
        return await self._call("get_routes")

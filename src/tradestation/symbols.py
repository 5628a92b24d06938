"""Symbol lookup endpoints (``/v2/data/symbols``)."""

from typing import Any, Optional

from src.tradestation.base import EndpointGroup
from src.tradestation.endpoints import SYMBOLS


class Symbols(EndpointGroup):
    """Symbol suggestion and search."""

    endpoints = SYMBOLS

    async def suggest_symbols(
        self, text: str, top: Optional[int] = None, filter: Optional[str] = None
    ) -> Any:
        """Suggest symbols from a partial symbol, company name or description.

        Option symbols are never suggested. ``filter`` is an OData
        expression, sent as ``$filter``; ``top`` is sent as ``$top``.
        """
        return await self._call(
            "suggest_symbols", {"text": text}, {"top": top, "filter": filter}
        )

    async def search_symbols(self, criteria: str) -> Any:
        """Search by ``&``-separated key/value criteria, e.g. ``"N=MSFT&C=Stock"``."""
        return await self._call("search_symbols", {"criteria": criteria})

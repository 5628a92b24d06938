"""Shared plumbing for the endpoint groups."""

from typing import Any, Mapping, Optional

from src.tradestation.dispatcher import RequestDispatcher
from src.tradestation.endpoints import Endpoint


class EndpointGroup:
    """Binds one descriptor table to a dispatcher.

    Subclasses only marshal typed arguments into path/query mappings;
    URL building, signing, unwrapping and error handling stay in the
    dispatcher.
    """

    endpoints: dict[str, Endpoint] = {}

    def __init__(self, dispatcher: RequestDispatcher):
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    async def _call(
        self,
        name: str,
        path_args: Optional[Mapping[str, Any]] = None,
        query_args: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        return await self._dispatcher.execute(
            self.endpoints[name], path_args, query_args, body
        )

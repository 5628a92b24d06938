"""Request Dispatcher.

Single request path shared by every TradeStation endpoint: build the URL
from the descriptor, sign it with the session token, send it, then either
unwrap the JSON envelope or hand back a RecordStream.
"""

import string
import time
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

from src.tradestation.config import STREAM_MEDIA_TYPE, Session
from src.tradestation.endpoints import Endpoint
from src.tradestation.exceptions import (
    MalformedResponseError,
    RequestFailedError,
    TradeStationError,
)
from src.tradestation.observer import RequestEvent, RequestObserver
from src.tradestation.streaming import RecordStream

_formatter = string.Formatter()

# Kept literal in path segments: comma-joined lists and search criteria.
_PATH_SAFE = ",=&"


def _placeholders(template: str) -> list[str]:
    return [name for _, name, _, _ in _formatter.parse(template) if name]


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestDispatcher:
    """Executes endpoint descriptors against the TradeStation API.

    The dispatcher never logs and never retries. Every failure surfaces as
    RequestFailedError or MalformedResponseError after the optional
    observer has seen it.

    Example:
        dispatcher = RequestDispatcher(Session(token="..."))
        positions = await dispatcher.execute(
            ACCOUNTS["get_positions"], {"account_ids": "12345"}
        )
    """

    def __init__(
        self,
        session: Session,
        http_client: Optional[httpx.AsyncClient] = None,
        request_timeout: float = 30.0,
        observer: Optional[RequestObserver] = None,
    ):
        self._session = session
        self._request_timeout = request_timeout
        self._observer = observer
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=request_timeout)

    @property
    def session(self) -> Session:
        return self._session

    @session.setter
    def session(self, session: Session) -> None:
        # Requests already built keep the token they were signed with.
        self._session = session

    @property
    def observer(self) -> Optional[RequestObserver]:
        return self._observer

    async def aclose(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._owns_client:
            await self._http_client.aclose()

    # -- Request construction ----------------------------------------------

    def build_url(
        self,
        endpoint: Endpoint,
        path_args: Optional[Mapping[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> str:
        """Substitute URL-escaped path arguments into the endpoint template."""
        session = session or self._session
        path_args = dict(path_args or {})
        names = _placeholders(endpoint.path)

        unexpected = set(path_args) - set(names)
        if unexpected:
            raise ValueError(
                f"{endpoint.name}: unexpected path arguments {sorted(unexpected)}"
            )

        segments = {}
        for name in names:
            value = path_args.get(name)
            if value is None or str(value) == "":
                raise ValueError(f"{endpoint.name}: path argument {name!r} is required")
            segments[name] = quote(str(value), safe=_PATH_SAFE)

        return f"{session.url_for(endpoint.domain)}/{endpoint.path.format(**segments)}"

    def build_params(
        self,
        endpoint: Endpoint,
        query_args: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, str]:
        """Resolve query defaults and drop every parameter left unset."""
        query_args = dict(query_args or {})
        known = {p.name for p in endpoint.query}
        unexpected = set(query_args) - known
        if unexpected:
            raise ValueError(
                f"{endpoint.name}: unexpected query arguments {sorted(unexpected)}"
            )

        params: dict[str, str] = {}
        for param in endpoint.query:
            value = param.resolve(query_args.get(param.name))
            if value is not None:
                params[param.wire] = _query_value(value)
        return params

    def build_request(
        self,
        endpoint: Endpoint,
        path_args: Optional[Mapping[str, Any]] = None,
        query_args: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Request:
        """Build a signed request; the session is read exactly once here."""
        session = self._session

        if body is not None and not endpoint.has_body:
            raise ValueError(f"{endpoint.name}: {endpoint.method} requests take no body")
        if body is None and endpoint.has_body:
            raise ValueError(f"{endpoint.name}: a JSON body is required")

        headers = {"Authorization": session.authorization}
        if endpoint.stream:
            headers["Accept"] = STREAM_MEDIA_TYPE
            timeout = httpx.Timeout(self._request_timeout, read=None)
        else:
            timeout = httpx.Timeout(self._request_timeout)

        return self._http_client.build_request(
            endpoint.method,
            self.build_url(endpoint, path_args, session=session),
            params=self.build_params(endpoint, query_args) or None,
            headers=headers,
            json=body,
            timeout=timeout,
        )

    # -- Execution ---------------------------------------------------------

    async def execute(
        self,
        endpoint: Endpoint,
        path_args: Optional[Mapping[str, Any]] = None,
        query_args: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Send the request described by ``endpoint``.

        Returns the unwrapped JSON value, or an open RecordStream for
        streaming endpoints. The caller owns the stream and must close it.

        Raises:
            RequestFailedError: Transport failure or non-2xx status.
            MalformedResponseError: 2xx response without the unwrap key.
            ValueError: Missing path argument or unknown query argument.
        """
        request = self.build_request(endpoint, path_args, query_args, body)
        started = time.perf_counter()

        try:
            response = await self._http_client.send(request, stream=endpoint.stream)
        except httpx.HTTPError as e:
            error = RequestFailedError(
                endpoint.name,
                message=f"{endpoint.name}: {type(e).__name__}: {e}",
            )
            self._notify(endpoint, request, None, started, error)
            raise error from e

        try:
            if not response.is_success:
                raise RequestFailedError(
                    endpoint.name,
                    status_code=response.status_code,
                    body=await self._error_body(response, endpoint),
                )
            if endpoint.stream:
                result = RecordStream(response, endpoint.name)
            else:
                result = self._unwrap(endpoint, response)
        except TradeStationError as e:
            self._notify(endpoint, request, response.status_code, started, e)
            raise

        try:
            self._notify(endpoint, request, response.status_code, started)
        except BaseException:
            if isinstance(result, RecordStream):
                await result.aclose()
            raise
        return result

    async def _error_body(self, response: httpx.Response, endpoint: Endpoint) -> Any:
        if endpoint.stream:
            try:
                await response.aread()
            finally:
                await response.aclose()
        try:
            return response.json()
        except ValueError:
            return response.text

    def _unwrap(self, endpoint: Endpoint, response: httpx.Response) -> Any:
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(endpoint.name, body=response.text) from e

        if endpoint.unwrap is None:
            return data

        keys = (endpoint.unwrap,) if isinstance(endpoint.unwrap, str) else endpoint.unwrap
        if not isinstance(data, dict):
            raise MalformedResponseError(endpoint.name, keys[0], data)
        for key in keys:
            if key not in data:
                raise MalformedResponseError(endpoint.name, key, data)

        if isinstance(endpoint.unwrap, str):
            return data[endpoint.unwrap]
        return {key: data[key] for key in keys}

    def _notify(
        self,
        endpoint: Endpoint,
        request: httpx.Request,
        status_code: Optional[int],
        started: float,
        error: Optional[BaseException] = None,
    ) -> None:
        if self._observer is None:
            return
        self._observer(RequestEvent(
            endpoint=endpoint.name,
            method=request.method,
            url=str(request.url),
            status_code=status_code,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            error=error,
        ))

"""Pytest configuration and shared fixtures."""

import asyncio
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class MockApi:
    """httpx.MockTransport handler that records every request it answers."""

    def __init__(self, handler=None):
        self.requests: list[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


class CountingStream(httpx.AsyncByteStream):
    """Response body that yields fixed chunks and counts aclose() calls.

    With ``hold_open=True`` it blocks after the last chunk, like a live
    stream waiting for the next update; ``fail_with`` is raised instead
    once the chunks run out, like a dropped connection.
    """

    def __init__(self, chunks, hold_open: bool = False, fail_with=None):
        self.chunks = list(chunks)
        self.hold_open = hold_open
        self.fail_with = fail_with
        self.close_count = 0

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
        if self.fail_with is not None:
            raise self.fail_with
        if self.hold_open:
            await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.close_count += 1


@pytest.fixture
def session():
    from src.tradestation.config import Session
    return Session(token="test-token")


@pytest.fixture
def mock_api():
    """Factory: ``api, dispatcher = mock_api(handler)``."""
    from src.tradestation.dispatcher import RequestDispatcher
    from src.tradestation.config import Session

    def _make(handler=None, observer=None, token="test-token"):
        api = MockApi(handler)
        dispatcher = RequestDispatcher(
            Session(token=token),
            http_client=api.http_client(),
            observer=observer,
        )
        return api, dispatcher

    return _make


@pytest.fixture
def json_api(mock_api):
    """Factory: dispatcher whose every response is ``status`` with ``body``."""

    def _make(body, status: int = 200, observer=None):
        return mock_api(lambda request: httpx.Response(status, json=body), observer=observer)

    return _make


@pytest.fixture
def stream_api(mock_api):
    """Factory: dispatcher answering with a CountingStream body."""

    def _make(chunks, hold_open: bool = False, status: int = 200, fail_with=None, observer=None):
        stream = CountingStream(chunks, hold_open=hold_open, fail_with=fail_with)
        api, dispatcher = mock_api(lambda request: httpx.Response(
            status,
            headers={"Content-Type": "application/vnd.tradestation.streams.v2+json"},
            stream=stream,
        ), observer=observer)
        return api, dispatcher, stream

    return _make


def sample_path_args(endpoint) -> dict:
    """Placeholder values for every path argument of ``endpoint``."""
    from src.tradestation.dispatcher import _placeholders
    return {name: f"{name.upper()}1" for name in _placeholders(endpoint.path)}


def sample_body(endpoint):
    return {"AccountID": "123456782", "Symbol": "MSFT"} if endpoint.has_body else None


@pytest.fixture
def endpoint_args():
    """Build ``(path_args, body)`` suitable for executing any endpoint."""

    def _make(endpoint):
        return sample_path_args(endpoint), sample_body(endpoint)

    return _make


@pytest.fixture
def ts_client():
    """Factory: ``api, client = ts_client(body, status)`` over a MockApi."""
    from src.tradestation.client import TradeStationClient
    from src.tradestation.config import Session

    def _make(body=None, status: int = 200):
        payload = body if body is not None else {}
        api = MockApi(lambda request: httpx.Response(status, json=payload))
        client = TradeStationClient(Session(token="test-token"), http_client=api.http_client())
        return api, client

    return _make

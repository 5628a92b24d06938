"""HTTP Record Streaming.

TradeStation streaming endpoints hold the connection open and write one
JSON object per line. RecordStream exposes such a response as a lazy async
iterator of decoded records that owns the connection and releases it
exactly once.

Example:
    async with await client.market_data.stream_quote_changes("MSFT") as stream:
        async for record in stream:
            if is_heartbeat(record):
                continue
            handle(record)
"""

import json
from typing import Any, AsyncIterator, Optional

import httpx

from src.tradestation.exceptions import MalformedResponseError, RequestFailedError


def is_heartbeat(record: dict) -> bool:
    return "Heartbeat" in record


def is_stream_status(record: dict) -> bool:
    """True for control records such as ``EndSnapshot`` and ``GoAway``."""
    return "StreamStatus" in record


def is_error(record: dict) -> bool:
    return "Error" in record


class RecordStream:
    """Lazy, closeable, non-restartable stream of JSON records.

    Records are decoded only as the consumer pulls them, so the consumer's
    pace is the backpressure. Leaving ``async with`` (normally, by error,
    or by task cancellation) closes the underlying connection, as does
    exhausting the stream or receiving an upstream error record.
    """

    def __init__(self, response: httpx.Response, endpoint: str):
        self._response = response
        self._endpoint = endpoint
        self._lines: Optional[AsyncIterator[str]] = None
        self._closed = False

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "RecordStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __aiter__(self) -> "RecordStream":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if self._closed:
            raise StopAsyncIteration
        if self._lines is None:
            self._lines = self._response.aiter_lines()

        while True:
            try:
                line = await self._lines.__anext__()
            except StopAsyncIteration:
                await self.aclose()
                raise
            except httpx.HTTPError as e:
                await self.aclose()
                raise RequestFailedError(
                    self._endpoint,
                    message=f"{self._endpoint}: {type(e).__name__}: {e}",
                ) from e

            line = line.strip()
            if not line:
                continue

            try:
                record = json.loads(line)
            except ValueError as e:
                await self.aclose()
                raise MalformedResponseError(self._endpoint, body=line) from e

            if isinstance(record, dict) and is_error(record):
                await self.aclose()
                raise RequestFailedError(
                    self._endpoint,
                    status_code=self._response.status_code,
                    body=record,
                )
            return record

    async def aclose(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        lines, self._lines = self._lines, None
        if lines is not None and hasattr(lines, "aclose"):
            await lines.aclose()
        await self._response.aclose()

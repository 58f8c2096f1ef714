"""Tests for stats_monitor.collectors.stats_fetcher against httpx.MockTransport."""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest

from stats_monitor.collectors.stats_fetcher import MAX_REDIRECTS, StatsFetcher
from stats_monitor.exceptions import (
    FetchError,
    ReadError,
    TransportError,
    UnexpectedStatusError,
)

URL = "http://stats.test/_stats"
PAYLOAD = "14.4,8589934592,3221225472,239475200000,235245200000,1000000000,500000"


class _BrokenStream(httpx.AsyncByteStream):
    """Body that dies halfway through."""

    async def __aiter__(self):
        yield b"14.4,"
        raise httpx.ReadError("connection reset by peer")


def _fetcher(handler) -> StatsFetcher:
    return StatsFetcher(URL, timeout=5.0, transport=httpx.MockTransport(handler))


# ── success ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_returns_body_text():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=PAYLOAD)

    async with _fetcher(handler) as fetcher:
        body = await fetcher.fetch()

    assert body == PAYLOAD
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == URL


@pytest.mark.asyncio
async def test_timeout_configured():
    fetcher = StatsFetcher(URL, timeout=5.0)
    try:
        assert fetcher._client.timeout == httpx.Timeout(5.0)
    finally:
        await fetcher.aclose()


# ── status ──────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [201, 304, 404, 500, 503])
async def test_non_200_is_transport_error(status: int):
    async with _fetcher(lambda request: httpx.Response(status, text=PAYLOAD)) as fetcher:
        with pytest.raises(UnexpectedStatusError) as exc_info:
            await fetcher.fetch()

    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value, TransportError)


# ── transport ───────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc_type",
    [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout],
)
async def test_transport_failures(exc_type: type[httpx.HTTPError]):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    async with _fetcher(handler) as fetcher:
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch()

    assert isinstance(exc_info.value.__cause__, exc_type)


# ── body ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_body_read_failure():
    async with _fetcher(lambda request: httpx.Response(200, stream=_BrokenStream())) as fetcher:
        with pytest.raises(ReadError) as exc_info:
            await fetcher.fetch()

    assert isinstance(exc_info.value.__cause__, httpx.ReadError)
    assert not isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_undecodable_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"\xff\xfe\xfa",
            headers={"content-type": "text/plain; charset=utf-8"},
        )

    async with _fetcher(handler) as fetcher:
        with pytest.raises(ReadError):
            await fetcher.fetch()


@pytest.mark.asyncio
async def test_all_failures_are_fetch_errors():
    async with _fetcher(lambda request: httpx.Response(502)) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch()


# ── whole-request deadline ──────────────────────────────


@pytest.fixture
async def slow_body_url():
    """Local server that sends headers at once, then one body byte every 0.4s."""
    handlers: set[asyncio.Task] = set()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        handlers.add(asyncio.current_task())
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: text/plain\r\n"
                b"Content-Length: 40\r\n\r\n"
            )
            for _ in range(40):
                writer.write(b"1")
                await writer.drain()
                await asyncio.sleep(0.4)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}/_stats"

    for task in handlers:
        task.cancel()
    await asyncio.gather(*handlers, return_exceptions=True)
    server.close()
    await server.wait_closed()


@pytest.mark.asyncio
async def test_slow_body_bounded_by_timeout(slow_body_url: str):
    fetcher = StatsFetcher(slow_body_url, timeout=1.0)
    started = time.monotonic()
    try:
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch()
    finally:
        await fetcher.aclose()

    assert time.monotonic() - started < 1.5
    assert isinstance(exc_info.value.__cause__, TimeoutError)


# ── redirects ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_follows_redirect_to_working_endpoint():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/_stats":
            return httpx.Response(301, headers={"location": "http://stats.test/new"})
        return httpx.Response(200, text=PAYLOAD)

    async with _fetcher(handler) as fetcher:
        assert await fetcher.fetch() == PAYLOAD


@pytest.mark.asyncio
async def test_redirect_to_failing_endpoint():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/_stats":
            return httpx.Response(302, headers={"location": "/gone"})
        return httpx.Response(404)

    async with _fetcher(handler) as fetcher:
        with pytest.raises(UnexpectedStatusError) as exc_info:
            await fetcher.fetch()

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_redirect_loop_is_transport_error():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(302, headers={"location": "/_stats"})

    async with _fetcher(handler) as fetcher:
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch()

    assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)
    assert len(calls) == MAX_REDIRECTS + 1

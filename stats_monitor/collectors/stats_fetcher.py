from __future__ import annotations

import asyncio
import logging

import httpx

from stats_monitor.exceptions import ReadError, TransportError, UnexpectedStatusError

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10


class StatsFetcher:
    """Performs the single GET of the statistics endpoint for a poll cycle.

    ``timeout`` bounds the whole request, from connect through the last
    byte of the body. Redirects are followed, up to ``MAX_REDIRECTS``.

    Every ``httpx`` failure is translated into the monitor's own
    ``FetchError`` hierarchy so the poller never sees transport types.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            transport=transport,
        )

    async def fetch(self) -> str:
        """Return the response body as text.

        Raises:
            UnexpectedStatusError: the final response was anything but 200.
            TransportError: connecting or sending failed, too many redirects,
                or the request as a whole ran past ``timeout``.
            ReadError: the body could not be fully read or decoded.
        """
        try:
            async with asyncio.timeout(self.timeout):
                async with self._client.stream("GET", self.url) as response:
                    if response.status_code != httpx.codes.OK:
                        raise UnexpectedStatusError(response.status_code)
                    try:
                        body = await response.aread()
                    except httpx.HTTPError as exc:
                        raise ReadError(f"failed reading body: {exc!r}") from exc
        except TimeoutError as exc:
            raise TransportError(f"GET {self.url} took longer than {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {self.url} failed: {exc!r}") from exc

        try:
            return body.decode(response.encoding or "utf-8")
        except (UnicodeDecodeError, LookupError) as exc:
            raise ReadError(f"undecodable body: {exc}") from exc

    # ── lifecycle ────────────────────────────────────────

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.debug("HTTP client for %s closed", self.url)

    async def __aenter__(self) -> StatsFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

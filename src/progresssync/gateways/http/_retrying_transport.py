"""httpx async transport wrapper with retry, backoff, and shared rate-limit pauses."""

from __future__ import annotations

import asyncio
import logging
import random
import time

import httpx

_LOG = logging.getLogger(__name__)

# Transient statuses worth another attempt. Progress writes are max-merged by
# the store of record, so replaying one is harmless.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
_DEFAULT_RETRY_AFTER = 1.0
_BACKOFF_CAP = 4.0


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with bounded retries.

    One gateway is shared by every mounted player, so a 429 pauses all
    requests going through this transport until ``Retry-After`` has passed.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._resume_at = 0.0
        self._unpaused = asyncio.Event()
        self._unpaused.set()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            await self._unpaused.wait()
            final = attempt >= self._max_retries

            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError:
                if final:
                    raise
                await self._sleep_backoff(attempt)
                attempt += 1
                continue

            if final or response.status_code not in _RETRYABLE_STATUS_CODES:
                return response

            retry_after = self._parse_retry_after(response)
            if response.status_code == 429:
                await self._pause_all(retry_after)
            elif retry_after > 0:
                await asyncio.sleep(retry_after)
            await self._sleep_backoff(attempt)
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def _pause_all(self, retry_after: float) -> None:
        resume_at = time.monotonic() + max(0.0, retry_after)
        if resume_at > self._resume_at:
            self._resume_at = resume_at
            self._unpaused.clear()
        await asyncio.sleep(max(0.0, self._resume_at - time.monotonic()))
        if time.monotonic() >= self._resume_at:
            self._unpaused.set()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return _DEFAULT_RETRY_AFTER
        try:
            return max(0.0, float(raw))
        except ValueError:
            return _DEFAULT_RETRY_AFTER

    @staticmethod
    async def _sleep_backoff(attempt: int) -> None:
        seconds = min(_BACKOFF_CAP, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying progress request (attempt %d)", attempt + 1)
        await asyncio.sleep(seconds)

"""Tests for RetryingTransport - retry, backoff, and rate-limit handling."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from progresssync.gateways.http._retrying_transport import RetryingTransport

_BACKOFF = "progresssync.gateways.http._retrying_transport.RetryingTransport._sleep_backoff"
_PAUSE = "progresssync.gateways.http._retrying_transport.RetryingTransport._pause_all"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code=status_code, headers=headers or {})


def _make_request() -> httpx.Request:
    return httpx.Request("POST", "https://lms.example/api/progress")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_defaults(self) -> None:
        transport = RetryingTransport()
        assert transport._max_retries == 3

    def test_custom_inner_transport(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        transport = RetryingTransport(transport=inner, max_retries=5)
        assert transport._transport is inner
        assert transport._max_retries == 5


# ---------------------------------------------------------------------------
# Successful requests
# ---------------------------------------------------------------------------


class TestSuccessfulRequests:
    @pytest.mark.asyncio
    async def test_returns_successful_response(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(200)

        transport = RetryingTransport(transport=inner)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 1

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(404)

        transport = RetryingTransport(transport=inner)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 404
        assert inner.handle_async_request.call_count == 1


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_retries_on_transport_error_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            httpx.ConnectError("connection reset"),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2
        mock_backoff.assert_awaited_once_with(0)

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_raises_after_max_retries_exhausted(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = httpx.ConnectError("fail")

        transport = RetryingTransport(transport=inner, max_retries=2)
        with pytest.raises(httpx.ConnectError, match="fail"):
            await transport.handle_async_request(_make_request())

        assert inner.handle_async_request.call_count == 3  # initial + 2 retries
        assert mock_backoff.await_count == 2


# ---------------------------------------------------------------------------
# Rate-limit (429)
# ---------------------------------------------------------------------------


class TestRateLimit:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    @patch(_PAUSE, new_callable=AsyncMock)
    async def test_429_pauses_with_retry_after(self, mock_pause: AsyncMock, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(429, {"Retry-After": "2"}),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        mock_pause.assert_awaited_once_with(2.0)
        mock_backoff.assert_awaited_once_with(0)

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    @patch(_PAUSE, new_callable=AsyncMock)
    async def test_429_returns_response_when_retries_exhausted(
        self, mock_pause: AsyncMock, mock_backoff: AsyncMock
    ) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(429)

        transport = RetryingTransport(transport=inner, max_retries=1)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 429
        assert inner.handle_async_request.call_count == 2  # initial + 1 retry
        mock_pause.assert_awaited_once_with(1.0)

    @pytest.mark.asyncio
    async def test_pause_all_with_elapsed_deadline_unblocks(self) -> None:
        transport = RetryingTransport(transport=AsyncMock(spec=httpx.AsyncBaseTransport))

        await transport._pause_all(0.0)

        assert transport._unpaused.is_set()


# ---------------------------------------------------------------------------
# Server errors (502, 503, 504)
# ---------------------------------------------------------------------------


class TestServerErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [502, 503, 504])
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_retries_transient_server_errors(self, mock_backoff: AsyncMock, status_code: int) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(status_code, {"Retry-After": "0"}),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=3)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2
        mock_backoff.assert_awaited_once_with(0)

    @pytest.mark.asyncio
    async def test_zero_retries_returns_first_response(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(503)

        transport = RetryingTransport(transport=inner, max_retries=0)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 503
        assert inner.handle_async_request.call_count == 1


# ---------------------------------------------------------------------------
# Retry-After parsing
# ---------------------------------------------------------------------------


class TestRetryAfter:
    @pytest.mark.parametrize(
        ("headers", "expected"),
        [({}, 1.0), ({"Retry-After": "3"}, 3.0), ({"Retry-After": "-4"}, 0.0), ({"Retry-After": "soon"}, 1.0)],
    )
    def test_parse_retry_after(self, headers: dict[str, str], expected: float) -> None:
        assert RetryingTransport._parse_retry_after(_make_response(503, headers)) == expected

"""HTTP gateway to the progress API."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from progresssync.contracts.config import GatewayConfig
from progresssync.contracts.exceptions import AuthenticationError, GatewayError, GatewayResponseError
from progresssync.contracts.gateway import SyncGateway
from progresssync.contracts.progress import Progress, QuizAttempt
from progresssync.gateways.http._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

PROGRESS_PATH = "/api/progress"
INTERACTION_EVENTS_PATH = "/api/interaction-events"
QUIZ_ATTEMPTS_PATH = "/api/quiz-attempts"


def _event_data(payload: dict[str, Any] | None) -> dict[str, Any] | None:
    # Adapter payload keys are snake_case; the interaction log stores camelCase.
    if not payload:
        return None
    return {to_camel(key): value for key, value in payload.items()}


class HttpSyncGateway(SyncGateway):
    """Talks to the progress API over HTTP.

    Use as an async context manager so the underlying client is opened and
    closed exactly once::

        async with HttpSyncGateway("https://learn.example.org") as gateway:
            record = await gateway.fetch_progress(content_id)

    Authentication is the caller's business: pass whatever session cookie or
    bearer header the deployment needs through *headers*.
    """

    def __init__(
        self,
        base_url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        max_retries: int = 3,
        learner_name: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = dict(headers or {})
        self._timeout = timeout
        self._max_retries = max_retries
        self._learner_name = learner_name
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: GatewayConfig, **kwargs: Any) -> HttpSyncGateway:
        return cls(
            config.base_url or "",
            headers=config.headers,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            learner_name=config.learner_name,
            **kwargs,
        )

    async def __aenter__(self) -> HttpSyncGateway:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_progress(self, content_id: str) -> Progress | None:
        response = await self._request("GET", f"{PROGRESS_PATH}/{quote(content_id, safe='')}")
        payload = self._json(response)
        if payload is None:
            return None
        try:
            return Progress.model_validate(payload)
        except ValidationError as exc:
            raise GatewayResponseError(
                f"malformed progress record for {content_id}: {exc}", status_code=response.status_code
            ) from exc

    async def write_progress(self, content_id: str, percentage: int) -> None:
        await self._request(
            "POST",
            PROGRESS_PATH,
            json={
                "contentId": content_id,
                "completionPercentage": percentage,
                "learnerName": self._learner_name,
            },
        )

    async def record_interaction(
        self, content_id: str, event_name: str, payload: dict[str, Any] | None = None
    ) -> None:
        await self._request(
            "POST",
            INTERACTION_EVENTS_PATH,
            json={"contentId": content_id, "eventType": event_name, "eventData": _event_data(payload)},
        )

    async def save_quiz_attempt(self, content_id: str, attempt: QuizAttempt) -> None:
        body = {"contentId": content_id, **attempt.model_dump(mode="json", by_alias=True)}
        await self._request("POST", QUIZ_ATTEMPTS_PATH, json=body)

    async def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> httpx.Response:
        if self._client is None:
            raise GatewayError("HttpSyncGateway used outside of its async context")
        _LOG.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise GatewayError(f"{method} {path} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(f"{method} {path} rejected with HTTP {response.status_code}")
        if response.is_error:
            raise GatewayResponseError(
                f"{method} {path} failed with HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayResponseError("response body is not JSON", status_code=response.status_code) from exc

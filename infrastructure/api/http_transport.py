"""httpx-backed transport for the queue bot API."""
from __future__ import annotations

import time
from typing import Mapping, Optional

import httpx

from core.logging.logger import StructuredLogger, get_logger
from domain.errors import TransportError
from domain.interfaces import ITransport, TransportResponse
from .retry_policy import RetryPolicy


class RetryableStatus(Exception):
    """A 429/5xx response that may succeed if repeated."""

    def __init__(self, response: TransportResponse, retry_after_ms: Optional[int] = None) -> None:
        super().__init__(f"http {response.status_code}")
        self.response = response
        self.status_code = response.status_code
        self.retry_after_ms = retry_after_ms


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, RetryableStatus):
        return True
    if isinstance(exc, TransportError):
        return exc.transient
    return False


def _retry_after_ms(resp: httpx.Response) -> Optional[int]:
    value = resp.headers.get("Retry-After")
    if not value:
        return None
    try:
        return int(float(value) * 1000)
    except ValueError:
        return None


class HttpxTransport(ITransport):
    """Issues requests through a pooled ``httpx.AsyncClient``.

    Transient failures (timeouts, network errors, 429 and 5xx) are retried
    according to ``retry``; once the budget is spent the last 429/5xx
    response is returned as-is and the last network error is raised as
    ``TransportError``.
    """

    def __init__(
        self,
        retry: Optional[RetryPolicy] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.retry = retry or RetryPolicy.none()
        self.logger = logger or get_logger(__name__)
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    def _session(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(http2=False)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        timeout: float,
    ) -> TransportResponse:
        async def _request() -> TransportResponse:
            start = time.perf_counter()
            try:
                resp = await self._session().request(method, url, headers=dict(headers), timeout=timeout)
            except httpx.TimeoutException as exc:
                raise TransportError(url, f"timeout after {timeout:.1f}s", transient=True) from exc
            except httpx.TransportError as exc:
                raise TransportError(url, f"network error: {exc}", transient=True) from exc
            except httpx.HTTPError as exc:
                raise TransportError(url, str(exc)) from exc

            latency_ms = int((time.perf_counter() - start) * 1000.0)
            result = TransportResponse(
                status_code=resp.status_code,
                headers=dict(resp.headers),
                latency_ms=latency_ms,
            )
            if resp.status_code == 429 or resp.status_code >= 500:
                result.body = resp.text
                raise RetryableStatus(result, _retry_after_ms(resp))
            if not result.ok:
                result.body = resp.text
                return result
            try:
                result.body = resp.json()
            except ValueError as exc:
                raise TransportError(url, "response body is not valid JSON") from exc
            return result

        try:
            return await self.retry.run(
                _request,
                is_transient=_is_transient,
                logger=self.logger,
                context={"endpoint": url},
            )
        except RetryableStatus as exc:
            return exc.response

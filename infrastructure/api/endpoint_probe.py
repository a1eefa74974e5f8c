"""Sequential probing of guessed endpoint paths."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, Optional, Sequence

import httpx

from core.logging.logger import StructuredLogger, get_logger
from domain.errors import CandidateFailure, TransportError
from domain.interfaces import ITransport
from .models import ProbeFailure, ProbeRequest, ProbeSuccess, RequestOutcome

PayloadCheck = Callable[[Any], bool]


def _has_body(payload: Any) -> bool:
    return payload is not None and payload != {} and payload != ""


class EndpointProbe:
    """Tries candidate paths strictly in order and returns the first usable payload.

    A candidate fails on a transport error, a non-2xx status, or a 2xx body
    rejected by ``accept``; probing then moves on to the next candidate.
    No candidate is requested twice here: retries belong to the transport.
    """

    def __init__(
        self,
        transport: ITransport,
        base_url: str,
        headers: Mapping[str, str],
        timeout_s: float,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers)
        self.timeout_s = timeout_s
        self.logger = logger or get_logger(__name__)

    def build_url(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        url = httpx.URL(f"{self.base_url}{path}")
        params = {k: v for k, v in (query or {}).items() if v is not None}
        if params:
            url = url.copy_merge_params(params)
        return str(url)

    async def probe(
        self,
        candidates: Sequence[str],
        request: Optional[ProbeRequest] = None,
        *,
        accept: PayloadCheck = _has_body,
        operation: str = "probe",
        cancel: Optional[asyncio.Event] = None,
    ) -> RequestOutcome:
        request = request or ProbeRequest()
        last_error: Optional[CandidateFailure] = None
        tried: list[str] = []

        for path in candidates:
            if cancel is not None and cancel.is_set():
                self.logger.info(lambda: "probe-cancelled", extra={"operation": operation, "endpoint": path})
                raise asyncio.CancelledError()

            tried.append(path)
            url = self.build_url(path, request.query)
            try:
                response = await self.transport.send(request.method, url, self.headers, self.timeout_s)
            except TransportError as exc:
                last_error = CandidateFailure(path, exc.reason)
                self._failed(operation, last_error)
                continue

            if not response.ok:
                last_error = CandidateFailure(path, _snippet(response.body), status=response.status_code)
                self._failed(operation, last_error)
                continue

            if not accept(response.body):
                last_error = CandidateFailure(path, "unrecognized payload shape", status=response.status_code)
                self._failed(operation, last_error)
                continue

            self.logger.success(
                lambda: "probe-candidate-ok",
                extra={"operation": operation, "endpoint": path, "status": response.status_code, "latency": response.latency_ms},
            )
            return ProbeSuccess(endpoint=path, payload=response.body, status_code=response.status_code, tried=tried)

        self.logger.warning(
            lambda: "probe-exhausted",
            extra={"operation": operation, "error": str(last_error) if last_error else "no candidates"},
        )
        return ProbeFailure(last_error=last_error, tried=tried)

    def _failed(self, operation: str, failure: CandidateFailure) -> None:
        self.logger.debug(
            lambda: "probe-candidate-failed",
            extra={"operation": operation, "endpoint": failure.endpoint, "status": failure.status, "error": failure.reason},
        )


def _snippet(body: Any, limit: int = 200) -> str:
    text = body if isinstance(body, str) else repr(body)
    return text[:limit]

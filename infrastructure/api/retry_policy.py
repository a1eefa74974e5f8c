"""Retry policy applied to each individual request by the transport."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from core.logging.logger import StructuredLogger


TransientPredicate = Callable[[BaseException], bool]
Supplier = Callable[[], Awaitable[Any]]
Sleeper = Callable[[float], Awaitable[Any]]


@dataclass(slots=True)
class RetryPolicy:
    """Exponential backoff over a fixed number of extra attempts.

    ``retries`` counts attempts after the first, so ``retries=0`` issues a
    single request. The budget is per request: every candidate endpoint
    gets the same allowance.
    """
    retries: int
    backoff_base_ms: int
    backoff_factor: float = 2.0

    @classmethod
    def from_config(cls, config: Any) -> "RetryPolicy":
        return cls(
            retries=max(0, config.retry_attempts),
            backoff_base_ms=max(0, config.retry_delay_ms),
            backoff_factor=config.retry_backoff,
        )

    @classmethod
    def none(cls) -> "RetryPolicy":
        return cls(retries=0, backoff_base_ms=0)

    def backoff_ms(self, attempt: int, floor_ms: Optional[int] = None) -> int:
        wait = int(self.backoff_base_ms * (self.backoff_factor ** (attempt - 1)))
        if floor_ms:
            wait = max(wait, floor_ms)
        return wait

    async def run(
        self,
        supplier: Supplier,
        *,
        is_transient: TransientPredicate,
        logger: StructuredLogger,
        context: dict[str, Any] | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> Any:
        """Execute an async supplier, retrying transient errors."""
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await supplier()
            except Exception as e:
                transient = is_transient(e)
                if attempt >= attempts or not transient:
                    raise
                wait_ms = self.backoff_ms(attempt, getattr(e, "retry_after_ms", None))
                logger.warning(
                    lambda: "retry-scheduled",
                    extra={**(context or {}), "attempt": attempt, "error": str(e), "wait_ms": wait_ms},
                )
                await sleep(wait_ms / 1000.0)

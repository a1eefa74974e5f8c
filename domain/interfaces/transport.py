"""Boundary interfaces consumed by the acquisition client."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional


@dataclass(slots=True)
class TransportResponse:
    """Status and decoded JSON body of one HTTP exchange."""
    status_code: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    latency_ms: Optional[int] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ITransport(ABC):
    """Interface for issuing HTTP requests."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        timeout: float,
    ) -> TransportResponse:
        """Issue one request; raise TransportError if no response was obtained."""
        pass

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
        return None


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

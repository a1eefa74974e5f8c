"""Outcomes of probing candidate endpoints."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from domain.errors import CandidateFailure


@dataclass(slots=True)
class ProbeRequest:
    """Method and query shared by every candidate of one probe."""
    method: str = "GET"
    query: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ProbeSuccess:
    """First candidate that answered with a plausible payload."""
    endpoint: str
    payload: Any
    status_code: int
    tried: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True)
class ProbeFailure:
    """Every candidate failed; only the most recent failure is kept."""
    last_error: Optional[CandidateFailure]
    tried: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return str(self.last_error) if self.last_error else "no candidates"


RequestOutcome = Union[ProbeSuccess, ProbeFailure]

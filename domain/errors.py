"""Exceptions raised while acquiring ranking data."""
from typing import Optional


class AcquisitionError(Exception):
    """Base exception for acquisition-related errors."""


class ConfigurationError(AcquisitionError):
    """Raised at construction time when the client configuration is unusable."""
    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid configuration for {field}: {reason}")
        self.field = field
        self.reason = reason


class TransportError(AcquisitionError):
    """Raised by a transport when no HTTP response could be obtained."""
    def __init__(self, url: str, reason: str, *, transient: bool = False):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.transient = transient


class CandidateFailure(AcquisitionError):
    """A single candidate endpoint did not yield a usable payload."""
    def __init__(self, endpoint: str, reason: str, status: Optional[int] = None):
        detail = f"HTTP {status} - {reason}" if status is not None else reason
        super().__init__(f"Candidate {endpoint} failed: {detail}")
        self.endpoint = endpoint
        self.reason = reason
        self.status = status


class AllCandidatesExhausted(AcquisitionError):
    """Every candidate endpoint for an operation failed."""
    def __init__(self, operation: str, last_failure: Optional[CandidateFailure]):
        reason = str(last_failure) if last_failure else "no candidates"
        super().__init__(f"All {operation} endpoints failed ({reason})")
        self.operation = operation
        self.last_failure = last_failure


class NormalizationAmbiguity(AcquisitionError):
    """The payload envelope did not match any known container shape."""
    def __init__(self, kind: str, keys: Optional[list] = None):
        shown = ", ".join(sorted(str(k) for k in keys)) if keys else "none"
        super().__init__(f"Unrecognized {kind} envelope (keys: {shown})")
        self.kind = kind
        self.keys = keys or []

"""Result provenance enumeration."""
from enum import Enum


class Provenance(Enum):
    """Where an acquisition result came from."""

    LIVE = "live"
    MOCK_UNCONFIGURED = "mock-unconfigured"
    MOCK_FALLBACK = "mock-fallback-on-error"

    @property
    def is_mock(self) -> bool:
        return self is not Provenance.LIVE

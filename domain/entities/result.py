"""Result envelope returned by every acquisition operation."""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from ..enums import Provenance

T = TypeVar('T')


@dataclass
class AcquisitionResult(Generic[T]):
    """Canonical data plus where it came from."""

    data: T
    provenance: Provenance
    source: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def records(self) -> T:
        return self.data

    @property
    def is_live(self) -> bool:
        return self.provenance is Provenance.LIVE

    def to_dict(self) -> dict:
        data = self.data
        if isinstance(data, list):
            payload: Any = [item.to_dict() if hasattr(item, 'to_dict') else item for item in data]
        elif hasattr(data, 'to_dict'):
            payload = data.to_dict()
        else:
            payload = data
        return {
            'data': payload,
            'source': self.provenance.value,
            'endpoint': self.source,
        }

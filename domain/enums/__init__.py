"""Domain enumerations."""
from .provenance import Provenance
from .resource import Resource

__all__ = [
    'Provenance',
    'Resource',
]

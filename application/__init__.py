"""Application layer - Acquisition client and its services."""
from .services import AcquisitionClient, MockDataProvider, ResponseNormalizer

__all__ = [
    'AcquisitionClient',
    'MockDataProvider',
    'ResponseNormalizer',
]

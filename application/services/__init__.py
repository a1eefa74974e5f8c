"""Application services root exports."""
from .acquisition_client import AcquisitionClient, EndpointReport
from .mock_data import MockDataProvider, MOCK_PLAYERS
from .normalizer import ResponseNormalizer
from .operations import OPERATIONS, OperationDescriptor

__all__ = [
    "AcquisitionClient",
    "EndpointReport",
    "MockDataProvider",
    "MOCK_PLAYERS",
    "ResponseNormalizer",
    "OPERATIONS",
    "OperationDescriptor",
]

"""Domain interfaces."""
from .transport import ITransport, TransportResponse, Clock, utc_now

__all__ = [
    'ITransport',
    'TransportResponse',
    'Clock',
    'utc_now',
]

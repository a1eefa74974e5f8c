"""Infrastructure layer - HTTP transport and endpoint probing."""
from .api import EndpointProbe, HttpxTransport, RetryPolicy

__all__ = [
    'EndpointProbe',
    'HttpxTransport',
    'RetryPolicy',
]

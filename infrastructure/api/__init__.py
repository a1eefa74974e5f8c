"""Infrastructure API module."""
from .endpoint_probe import EndpointProbe
from .http_transport import HttpxTransport
from .models import ProbeFailure, ProbeRequest, ProbeSuccess, RequestOutcome
from .retry_policy import RetryPolicy

__all__ = [
    'EndpointProbe',
    'HttpxTransport',
    'ProbeFailure',
    'ProbeRequest',
    'ProbeSuccess',
    'RequestOutcome',
    'RetryPolicy',
]

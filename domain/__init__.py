"""Domain layer - Canonical records, enums, errors and derived metrics."""
from .entities import PlayerRecord, TeamRecord, MatchRecord, GuildStats, AcquisitionResult
from .enums import Provenance, Resource
from .errors import (
    AcquisitionError,
    ConfigurationError,
    TransportError,
    CandidateFailure,
    AllCandidatesExhausted,
    NormalizationAmbiguity,
)
from .interfaces import ITransport, TransportResponse, Clock, utc_now
from . import metrics

__all__ = [
    # Entities
    'PlayerRecord',
    'TeamRecord',
    'MatchRecord',
    'GuildStats',
    'AcquisitionResult',
    # Enums
    'Provenance',
    'Resource',
    # Errors
    'AcquisitionError',
    'ConfigurationError',
    'TransportError',
    'CandidateFailure',
    'AllCandidatesExhausted',
    'NormalizationAmbiguity',
    # Interfaces
    'ITransport',
    'TransportResponse',
    'Clock',
    'utc_now',
    'metrics',
]

"""Domain entities."""
from .player import PlayerRecord
from .team import TeamRecord
from .match import MatchRecord
from .guild_stats import GuildStats
from .result import AcquisitionResult

__all__ = [
    'PlayerRecord',
    'TeamRecord',
    'MatchRecord',
    'GuildStats',
    'AcquisitionResult',
]

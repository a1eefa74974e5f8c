"""Logical resources served by the queue bot API."""
from enum import Enum


class Resource(Enum):
    """Resource kinds, each with its own candidate endpoints."""

    LEADERBOARD = "leaderboard"
    GLOBAL_STATS = "global-stats"
    PLAYER_STATS = "player-stats"
    GUILD_STATS = "guild-stats"
    SEASONS = "seasons"
    MATCHES = "matches"
    QUEUE = "queue"

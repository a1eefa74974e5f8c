"""Aggregate statistics for a guild."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class GuildStats:
    """Guild-wide totals, either reported upstream or derived from players."""

    total_players: int = 0
    total_games: int = 0
    total_wins: int = 0
    average_score: int = 0
    average_level: int = 1
    top_player: Optional[str] = None

    # Upstream fields with no canonical counterpart
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'totalPlayers': self.total_players,
            'totalGames': self.total_games,
            'totalWins': self.total_wins,
            'averageScore': self.average_score,
            'averageLevel': self.average_level,
            'topPlayer': self.top_player,
            'raw': dict(self.raw),
        }

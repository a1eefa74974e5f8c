"""Player ranking record."""
from dataclasses import dataclass
from typing import Optional

from .. import metrics


@dataclass
class PlayerRecord:
    """A ranked player, in the canonical shape shared by live and mock data."""

    # Identity
    id: str
    username: str

    # Ranking
    score: float = 0
    rank: int = 1

    # Record
    wins: int = 0
    games_played: int = 0

    last_active: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def level(self) -> int:
        """Level derived from score."""
        return metrics.level(self.score)

    @property
    def losses(self) -> int:
        return metrics.losses(self.wins, self.games_played)

    @property
    def win_rate(self) -> float:
        """Win percentage, one decimal."""
        return metrics.win_rate(self.wins, self.games_played)

    def to_dict(self) -> dict:
        """Convert player to the presentation-layer dictionary."""
        return {
            'id': self.id,
            'username': self.username,
            'score': self.score,
            'level': self.level,
            'wins': self.wins,
            'gamesPlayed': self.games_played,
            'losses': self.losses,
            'winRate': self.win_rate,
            'rank': self.rank,
            'lastActive': self.last_active,
            'avatar': self.avatar,
        }

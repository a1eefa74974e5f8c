"""Team entity representing a group waiting in a matchmaking queue."""
from dataclasses import dataclass, field
from typing import List

from .player import PlayerRecord
from .. import metrics


@dataclass
class TeamRecord:
    """A queued team and its members."""

    id: str
    team_name: str
    position: int

    # ISO-8601 join time, and milliseconds waited as of normalization
    joined_at: str
    wait_time: int = 0

    players: List[PlayerRecord] = field(default_factory=list)

    @property
    def average_level(self) -> int:
        return metrics.average_level(p.level for p in self.players)

    @property
    def average_score(self) -> int:
        return metrics.average_score(p.score for p in self.players)

    def to_dict(self) -> dict:
        """Convert team to dictionary."""
        return {
            'id': self.id,
            'teamName': self.team_name,
            'players': [p.to_dict() for p in self.players],
            'averageLevel': self.average_level,
            'averageScore': self.average_score,
            'joinedAt': self.joined_at,
            'position': self.position,
            'waitTime': self.wait_time,
        }

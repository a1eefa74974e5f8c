"""Match entity representing a completed queue match."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class MatchRecord:
    """A recent match as reported by the queue bot."""

    id: str
    queue: Optional[str] = None
    winner: Optional[str] = None
    played_at: Optional[str] = None
    participants: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'queue': self.queue,
            'winner': self.winner,
            'playedAt': self.played_at,
            'participants': list(self.participants),
        }

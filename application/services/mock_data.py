"""Deterministic placeholder data served when live data is unavailable."""
from __future__ import annotations

from typing import Any, List, Optional

from domain.entities import GuildStats, MatchRecord, PlayerRecord, TeamRecord
from domain.interfaces import Clock, utc_now
from domain import metrics
from .normalizer import to_iso

# (username, score, wins, games played), in rank order
MOCK_PLAYERS: tuple[tuple[str, int, int, int], ...] = (
    ("ApeKing001",   15420, 128, 150),
    ("BananaMaster", 13850, 115, 142),
    ("SquadLeader",  12750, 102, 135),
    ("NeatGamer",    11600,  95, 128),
    ("QueueMaster",  10950,  88, 120),
    ("DiscordApe",   10200,  82, 115),
    ("RankClimber",   9750,  76, 108),
    ("BotSlayer",     9150,  71, 102),
    ("ElitePlayer",   8650,  65,  95),
    ("TopApe",        8200,  60,  90),
    ("ClimbMaster",   7850,  55,  85),
    ("RankWarrior",   7500,  50,  80),
    ("GameChanger",   7200,  47,  75),
    ("ProGamer",      6900,  43,  70),
    ("SkillMaster",   6600,  40,  65),
)


class MockDataProvider:
    """Placeholder records, shaped exactly like normalized live records."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock

    def get_mock_leaderboard(self, limit: Optional[int] = None) -> List[PlayerRecord]:
        """First ``limit`` placeholder players (all of them when ``limit`` is None)."""
        rows = MOCK_PLAYERS if limit is None else MOCK_PLAYERS[:max(0, limit)]
        now = to_iso(self.clock())
        return [
            PlayerRecord(
                id=str(position),
                username=username,
                score=score,
                rank=position,
                wins=wins,
                games_played=games,
                last_active=now,
                avatar=None,
            )
            for position, (username, score, wins, games) in enumerate(rows, start=1)
        ]

    def leaderboard_from_stats(self, stats: Any, limit: Optional[int] = None) -> List[PlayerRecord]:
        """Leaderboard stand-in when only global stats are reachable.

        The global stats carry no per-player rows, so the placeholder
        players are used; ``stats`` is only reported alongside them.
        """
        return self.get_mock_leaderboard(limit)

    def mock_player(self, player_id: str) -> Optional[PlayerRecord]:
        wanted = str(player_id).strip().lower()
        for player in self.get_mock_leaderboard():
            if player.id == wanted or player.username.lower() == wanted:
                return player
        return None

    def mock_guild_stats(self) -> GuildStats:
        players = self.get_mock_leaderboard()
        return GuildStats(
            total_players=len(players),
            total_games=sum(p.games_played for p in players),
            total_wins=sum(p.wins for p in players),
            average_score=metrics.average_score(p.score for p in players),
            average_level=metrics.average_level(p.level for p in players),
            top_player=players[0].username,
        )

    def mock_queue(self) -> List[TeamRecord]:
        """Nobody is queued in placeholder data."""
        return []

    def mock_seasons(self) -> List[str]:
        return []

    def mock_matches(self) -> List[MatchRecord]:
        return []

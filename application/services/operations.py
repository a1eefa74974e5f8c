"""Candidate endpoints per resource.

Each descriptor lists guessed URL templates, most specific first, and
the check a 2xx payload must pass before probing stops. The lists are
guesses about an undocumented service, not a published schema.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List
from urllib.parse import quote

from domain.enums import Resource
from . import normalizer


@dataclass(frozen=True)
class OperationDescriptor:
    resource: Resource
    candidates: tuple[str, ...]
    accept: Callable[[Any], bool]

    def render(self, **params: Any) -> List[str]:
        safe = {k: quote(str(v), safe="") for k, v in params.items()}
        return [template.format(**safe) for template in self.candidates]


OPERATIONS: Dict[Resource, OperationDescriptor] = {
    Resource.LEADERBOARD: OperationDescriptor(
        Resource.LEADERBOARD,
        (
            "/api/playerstats/{guild_id}",
            "/api/queues/{guild_id}/players",
            "/api/leaderboard/{guild_id}",
            "/api/guild/{guild_id}/leaderboard",
            "/api/server/{guild_id}/leaderboard",
        ),
        normalizer.has_players,
    ),
    Resource.GLOBAL_STATS: OperationDescriptor(
        Resource.GLOBAL_STATS,
        ("/api/stats",),
        normalizer.has_stats,
    ),
    Resource.PLAYER_STATS: OperationDescriptor(
        Resource.PLAYER_STATS,
        (
            "/api/playerstats/{guild_id}/{player_id}",
            "/api/players/{player_id}?server={guild_id}",
            "/api/guild/{guild_id}/players/{player_id}",
            "/api/server/{guild_id}/players/{player_id}",
        ),
        lambda payload: normalizer.extract_player(payload) is not None,
    ),
    Resource.GUILD_STATS: OperationDescriptor(
        Resource.GUILD_STATS,
        (
            "/api/playerstats/{guild_id}",
            "/api/guild/{guild_id}/stats",
            "/api/server/{guild_id}/stats",
            "/api/stats/{guild_id}",
        ),
        normalizer.has_stats,
    ),
    Resource.SEASONS: OperationDescriptor(
        Resource.SEASONS,
        (
            "/api/seasons/{guild_id}",
            "/api/guild/{guild_id}/seasons",
            "/api/server/{guild_id}/seasons",
        ),
        normalizer.has_seasons,
    ),
    Resource.MATCHES: OperationDescriptor(
        Resource.MATCHES,
        (
            "/api/matches/{guild_id}",
            "/api/guild/{guild_id}/matches",
            "/api/server/{guild_id}/matches",
        ),
        normalizer.has_matches,
    ),
    Resource.QUEUE: OperationDescriptor(
        Resource.QUEUE,
        (
            "/api/queues/{guild_id}",
            "/api/queues/{guild_id}/teams",
            "/api/queue/{guild_id}",
            "/api/queue/{guild_id}/teams",
            "/api/queues",
            "/api/queue",
        ),
        normalizer.has_teams,
    ),
}

DISCOVERY_PATHS: tuple[str, ...] = (
    "/",
    "/api",
    "/v1",
    "/v1/api",
    "/api/v1",
    "/webhook",
    "/guilds",
    "/leaderboard",
    "/players",
    "/stats",
    "/health",
    "/status",
)

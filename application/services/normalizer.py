"""Normalization of loosely-shaped queue bot payloads into canonical records.

The upstream service publishes no schema. Each canonical field is read
from the first present, non-null key of a synonym list; each payload's
records are found under the first envelope key that holds a list.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from domain.entities import GuildStats, MatchRecord, PlayerRecord, TeamRecord
from domain.errors import NormalizationAmbiguity
from domain.interfaces import Clock, utc_now
from domain import metrics

# ── Envelopes (checked after "payload is itself a list") ─────────────────
PLAYER_ENVELOPE: tuple[str, ...] = ("leaderboard", "players", "data", "playerstats")
TEAM_ENVELOPE: tuple[str, ...] = ("leaderboard", "players", "data", "queue", "teams")
SEASON_ENVELOPE: tuple[str, ...] = ("seasons", "data")
MATCH_ENVELOPE: tuple[str, ...] = ("matches", "data", "games")
SINGLE_PLAYER_KEYS: tuple[str, ...] = ("player", "data", "playerstats", "stats")

# ── Synonym tables ────────────────────────────────────────────────────────
PLAYER_FIELDS: Dict[str, tuple[str, ...]] = {
    "id": ("user_id", "id", "discord_id", "userId"),
    "username": ("username", "display_name", "name", "ign"),
    "score": ("rating", "score", "points", "mmr"),
    "wins": ("wins", "total_wins", "win"),
    "games_played": ("total_games", "games_played", "matches_played", "games"),
    "losses": ("losses", "loss"),
    "rank": ("rank",),
    "last_active": ("last_active", "last_played", "lastActive"),
    "avatar": ("avatar", "avatar_url", "avatarUrl"),
}

TEAM_FIELDS: Dict[str, tuple[str, ...]] = {
    "id": ("id", "team_id", "teamId"),
    "team_name": ("teamName", "team_name", "name"),
    "players": ("players", "members"),
    "joined_at": ("joinedAt", "joined_at", "timestamp", "createdAt", "created_at"),
}

MATCH_FIELDS: Dict[str, tuple[str, ...]] = {
    "id": ("match_id", "id", "game_id", "matchId"),
    "queue": ("queue", "queue_name", "queueName"),
    "winner": ("winner", "winning_team", "winningTeam", "winner_team"),
    "played_at": ("played_at", "timestamp", "created_at", "createdAt", "date", "time"),
    "participants": ("players", "participants", "members"),
}

GUILD_FIELDS: Dict[str, tuple[str, ...]] = {
    "total_players": ("total_players", "player_count", "totalPlayers", "players", "members"),
    "total_games": ("total_games", "games", "total_matches", "matches_played", "totalGames", "matches"),
    "total_wins": ("total_wins", "wins", "totalWins"),
    "top_player": ("top_player", "topPlayer", "best_player"),
}

AVERAGE_SCORE_KEYS: tuple[str, ...] = ("average_score", "averageScore", "avg_rating", "average_rating")

SEASON_NAME_KEYS: tuple[str, ...] = ("name", "season", "id", "season_id")

# Epoch values above this are milliseconds
_EPOCH_MS_THRESHOLD = 10 ** 11


# ── Primitive coercion ────────────────────────────────────────────────────

def pick(record: Mapping[str, Any], names: Iterable[str]) -> Any:
    """First present, non-null value among ``names``."""
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def to_number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number) if number.is_integer() else number


def to_count(value: Any, default: int = 0) -> int:
    """Non-negative integer, or ``default`` when unparseable."""
    number = to_number(value, default)
    return max(0, int(number))


def to_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 strings, epoch seconds or epoch milliseconds; naive values are UTC."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) or (isinstance(value, str) and value.strip().isdigit()):
        seconds = float(value)
        if seconds > _EPOCH_MS_THRESHOLD:
            seconds /= 1000.0
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ── Envelope resolution ───────────────────────────────────────────────────

def resolve_container(raw: Any, keys: Sequence[str], _depth: int = 0) -> Optional[List[Any]]:
    """The record list inside ``raw``, or None when no envelope matches.

    A list payload is its own container. Otherwise ``keys`` are checked in
    order; a key holding an object is searched one level down
    (e.g. ``{"data": {"players": [...]}}``).
    """
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, dict) or _depth > 1:
        return None
    for key in keys:
        value = raw.get(key)
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            nested = resolve_container(value, keys, _depth + 1)
            if nested is not None:
                return nested
    return None


def has_players(raw: Any) -> bool:
    return resolve_container(raw, PLAYER_ENVELOPE) is not None


def has_teams(raw: Any) -> bool:
    return resolve_container(raw, TEAM_ENVELOPE) is not None


def has_seasons(raw: Any) -> bool:
    return resolve_container(raw, SEASON_ENVELOPE) is not None


def has_matches(raw: Any) -> bool:
    return resolve_container(raw, MATCH_ENVELOPE) is not None


def has_stats(raw: Any) -> bool:
    """A player list, or an object carrying at least one known aggregate."""
    if resolve_container(raw, PLAYER_ENVELOPE) is not None:
        return True
    if not isinstance(raw, dict):
        return False
    known = [key for names in GUILD_FIELDS.values() for key in names] + list(AVERAGE_SCORE_KEYS)
    return any(raw.get(key) is not None for key in known)


def looks_like_player(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    known = PLAYER_FIELDS["id"] + PLAYER_FIELDS["username"] + PLAYER_FIELDS["score"]
    return any(raw.get(key) is not None for key in known)


def _player_id(record: Mapping[str, Any]) -> Optional[str]:
    return to_text(pick(record, PLAYER_FIELDS["id"]))


def extract_player(raw: Any, player_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """The single player object in a player-stats payload, if any.

    With ``player_id`` a row carrying a different id never matches; a
    list falls back to its row only when that row is alone and has no id.
    """
    container = resolve_container(raw, PLAYER_ENVELOPE)
    if container is not None:
        players = [p for p in container if isinstance(p, dict)]
        if player_id is None:
            return players[0] if players else None
        for p in players:
            if _player_id(p) == str(player_id):
                return p
        if len(players) == 1 and _player_id(players[0]) is None:
            return players[0]
        return None
    if not isinstance(raw, dict):
        return None
    found = next((raw[key] for key in SINGLE_PLAYER_KEYS if looks_like_player(raw.get(key))), None)
    if found is None and looks_like_player(raw):
        found = raw
    if found is None:
        return None
    if player_id is not None and _player_id(found) not in (None, str(player_id)):
        return None
    return found


class ResponseNormalizer:
    """Maps raw payloads onto PlayerRecord / TeamRecord / MatchRecord / GuildStats."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock

    # ── Players ─────────────────────────────────────────────────────────
    def normalize_player(self, record: Any, position: int) -> Optional[PlayerRecord]:
        if isinstance(record, str):
            return PlayerRecord(id=record, username=record, rank=position)
        if not isinstance(record, dict):
            return None
        f = PLAYER_FIELDS
        wins = to_count(pick(record, f["wins"]))
        games_raw = pick(record, f["games_played"])
        if games_raw is None and pick(record, f["losses"]) is not None:
            games = wins + to_count(pick(record, f["losses"]))
        else:
            games = to_count(games_raw)
        rank = to_count(pick(record, f["rank"]))
        last_active = parse_timestamp(pick(record, f["last_active"]))
        return PlayerRecord(
            id=to_text(pick(record, f["id"])) or str(position),
            username=to_text(pick(record, f["username"])) or f"Player {position}",
            score=max(0, to_number(pick(record, f["score"]))),
            rank=rank if rank > 0 else position,
            wins=wins,
            games_played=games,
            last_active=to_iso(last_active) if last_active else None,
            avatar=to_text(pick(record, f["avatar"])),
        )

    def _players_from(self, container: Iterable[Any]) -> List[PlayerRecord]:
        players: List[PlayerRecord] = []
        for record in container:
            player = self.normalize_player(record, len(players) + 1)
            if player is not None:
                players.append(player)
        return players

    def normalize_players(self, raw: Any, *, strict: bool = False) -> List[PlayerRecord]:
        """Players in upstream order; ranks fall back to 1-based position.

        An unrecognized envelope yields an empty list, or raises
        ``NormalizationAmbiguity`` when ``strict``.
        """
        container = resolve_container(raw, PLAYER_ENVELOPE)
        if container is None:
            if strict:
                raise NormalizationAmbiguity("player", list(raw) if isinstance(raw, dict) else None)
            return []
        return self._players_from(container)

    def normalize_player_stats(self, raw: Any, player_id: Optional[str] = None) -> Optional[PlayerRecord]:
        record = extract_player(raw, player_id)
        if record is None:
            return None
        return self.normalize_player(record, 1)

    # ── Teams ───────────────────────────────────────────────────────────
    def normalize_team(self, record: Any, position: int, now: datetime) -> Optional[TeamRecord]:
        if not isinstance(record, dict):
            return None
        f = TEAM_FIELDS
        members = pick(record, f["players"])
        joined = parse_timestamp(pick(record, f["joined_at"]))
        return TeamRecord(
            id=to_text(pick(record, f["id"])) or str(position),
            team_name=to_text(pick(record, f["team_name"])) or f"Team {position}",
            position=position,
            joined_at=to_iso(joined or now),
            wait_time=metrics.wait_time_ms(joined, now),
            players=self._players_from(members) if isinstance(members, list) else [],
        )

    def normalize_teams(self, raw: Any, *, strict: bool = False) -> List[TeamRecord]:
        """Teams in queue order; position is order of appearance."""
        container = resolve_container(raw, TEAM_ENVELOPE)
        if container is None:
            if strict:
                raise NormalizationAmbiguity("team", list(raw) if isinstance(raw, dict) else None)
            return []
        now = self.clock()
        teams: List[TeamRecord] = []
        for record in container:
            team = self.normalize_team(record, len(teams) + 1, now)
            if team is not None:
                teams.append(team)
        return teams

    # ── Guild stats ─────────────────────────────────────────────────────
    def guild_stats_from_players(self, players: Sequence[PlayerRecord], raw: Optional[Dict[str, Any]] = None) -> GuildStats:
        top = max(players, key=lambda p: p.score) if players else None
        return GuildStats(
            total_players=len(players),
            total_games=sum(p.games_played for p in players),
            total_wins=sum(p.wins for p in players),
            average_score=metrics.average_score(p.score for p in players),
            average_level=metrics.average_level(p.level for p in players),
            top_player=top.username if top else None,
            raw=dict(raw or {}),
        )

    def normalize_guild_stats(self, raw: Any) -> GuildStats:
        if resolve_container(raw, PLAYER_ENVELOPE) is not None:
            extras = {k: v for k, v in raw.items() if not isinstance(v, list)} if isinstance(raw, dict) else {}
            return self.guild_stats_from_players(self.normalize_players(raw), extras)
        if not isinstance(raw, dict):
            return GuildStats()
        f = GUILD_FIELDS
        players = pick(raw, f["total_players"])
        total_players = len(players) if isinstance(players, list) else to_count(players)
        score = to_number(pick(raw, AVERAGE_SCORE_KEYS))
        return GuildStats(
            total_players=total_players,
            total_games=to_count(pick(raw, f["total_games"])),
            total_wins=to_count(pick(raw, f["total_wins"])),
            average_score=int(score),
            average_level=metrics.level(score),
            top_player=to_text(pick(raw, f["top_player"])),
            raw=dict(raw),
        )

    # ── Seasons ─────────────────────────────────────────────────────────
    def normalize_seasons(self, raw: Any) -> List[str]:
        container = resolve_container(raw, SEASON_ENVELOPE) or []
        seasons: List[str] = []
        for item in container:
            name = to_text(pick(item, SEASON_NAME_KEYS)) if isinstance(item, dict) else to_text(item)
            if name and name not in seasons:
                seasons.append(name)
        return seasons

    # ── Matches ─────────────────────────────────────────────────────────
    def normalize_match(self, record: Any, position: int) -> Optional[MatchRecord]:
        if not isinstance(record, dict):
            return None
        f = MATCH_FIELDS
        played = parse_timestamp(pick(record, f["played_at"]))
        participants = pick(record, f["participants"])
        if participants is None and isinstance(record.get("teams"), list):
            participants = [m for team in record["teams"] for m in _team_members(team)]
        if not isinstance(participants, list):
            participants = []
        return MatchRecord(
            id=to_text(pick(record, f["id"])) or str(position),
            queue=to_text(pick(record, f["queue"])),
            winner=to_text(pick(record, f["winner"])),
            played_at=to_iso(played) if played else None,
            participants=[name for name in (_participant_name(p) for p in participants) if name],
        )

    def normalize_matches(self, raw: Any) -> List[MatchRecord]:
        container = resolve_container(raw, MATCH_ENVELOPE) or []
        matches: List[MatchRecord] = []
        for record in container:
            match = self.normalize_match(record, len(matches) + 1)
            if match is not None:
                matches.append(match)
        return matches


def _team_members(team: Any) -> List[Any]:
    if isinstance(team, list):
        return team
    if isinstance(team, dict):
        members = pick(team, TEAM_FIELDS["players"])
        return members if isinstance(members, list) else []
    return []


def _participant_name(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        return to_text(pick(item, PLAYER_FIELDS["username"])) or to_text(pick(item, PLAYER_FIELDS["id"]))
    return to_text(item)

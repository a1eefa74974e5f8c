"""Tests for envelope resolution and field synonym handling."""

from datetime import timedelta

import pytest

from application.services.normalizer import (
    ResponseNormalizer,
    extract_player,
    has_stats,
    parse_timestamp,
    resolve_container,
    PLAYER_ENVELOPE,
    to_iso,
)
from domain.errors import NormalizationAmbiguity
from tests.fakes import FROZEN_NOW, frozen_clock

ROWS = [
    {"id": 1, "username": "alpha", "rating": 900, "wins": 6, "total_games": 10},
    {"id": 2, "username": "beta", "rating": 450, "wins": 1, "total_games": 3},
]


@pytest.fixture
def normalizer() -> ResponseNormalizer:
    return ResponseNormalizer(frozen_clock)


class TestPlayers:
    """Player records from leaderboard-like payloads."""

    def test_array_payload(self, normalizer):
        players = normalizer.normalize_players([{"id": 1, "username": "a", "rating": 10}])
        assert len(players) == 1
        p = players[0]
        assert p.id == "1"
        assert p.username == "a"
        assert p.score == 10
        assert p.level == 1
        assert p.rank == 1

    @pytest.mark.parametrize("key", ["leaderboard", "players", "data", "playerstats"])
    def test_envelope_transparency(self, normalizer, key):
        assert normalizer.normalize_players({key: ROWS}) == normalizer.normalize_players(ROWS)

    def test_envelope_precedence(self, normalizer):
        payload = {"data": [{"username": "from-data"}], "leaderboard": [{"username": "from-leaderboard"}]}
        assert normalizer.normalize_players(payload)[0].username == "from-leaderboard"

    def test_nested_envelope(self, normalizer):
        players = normalizer.normalize_players({"data": {"players": ROWS}})
        assert [p.username for p in players] == ["alpha", "beta"]

    def test_unrecognized_envelope_is_empty(self, normalizer):
        assert normalizer.normalize_players({"total_games": 12}) == []

    def test_unrecognized_envelope_strict(self, normalizer):
        with pytest.raises(NormalizationAmbiguity):
            normalizer.normalize_players({"total_games": 12}, strict=True)

    def test_identifier_synonym_order(self, normalizer):
        p = normalizer.normalize_players([{"id": "x", "user_id": "u", "discord_id": "d"}])[0]
        assert p.id == "u"

    def test_score_synonym_order(self, normalizer):
        p = normalizer.normalize_players([{"mmr": 5, "points": 4, "score": 3}])[0]
        assert p.score == 3

    def test_zero_is_present_not_missing(self, normalizer):
        p = normalizer.normalize_players([{"rating": 0, "score": 1200}])[0]
        assert p.score == 0

    def test_null_falls_through(self, normalizer):
        p = normalizer.normalize_players([{"rating": None, "score": 1200}])[0]
        assert p.score == 1200

    def test_upstream_level_ignored(self, normalizer):
        p = normalizer.normalize_players([{"rating": 900, "level": 99}])[0]
        assert p.level == 4

    def test_defaults(self, normalizer):
        p = normalizer.normalize_players([{}, {}])[1]
        assert p.id == "2"
        assert p.username == "Player 2"
        assert p.score == 0
        assert p.wins == 0
        assert p.games_played == 0
        assert p.win_rate == 0
        assert p.last_active is None
        assert p.avatar is None

    def test_upstream_rank_honored(self, normalizer):
        players = normalizer.normalize_players([{"rank": 7}, {}])
        assert [p.rank for p in players] == [7, 2]

    def test_order_preserved_not_sorted(self, normalizer):
        players = normalizer.normalize_players([{"rating": 10}, {"rating": 5000}])
        assert [p.score for p in players] == [10, 5000]
        assert [p.rank for p in players] == [1, 2]

    def test_losses_are_derived(self, normalizer):
        p = normalizer.normalize_players([{"wins": 12, "total_games": 10, "losses": 40}])[0]
        assert p.losses == 0

    def test_games_inferred_from_losses(self, normalizer):
        p = normalizer.normalize_players([{"wins": 3, "losses": 2}])[0]
        assert p.games_played == 5
        assert p.win_rate == 60.0

    def test_numeric_strings_coerced(self, normalizer):
        p = normalizer.normalize_players([{"rating": "1500", "wins": "4", "games": "8"}])[0]
        assert p.score == 1500
        assert p.level == 6
        assert p.win_rate == 50.0

    def test_garbage_numbers_default(self, normalizer):
        p = normalizer.normalize_players([{"rating": "n/a", "wins": -3}])[0]
        assert p.score == 0
        assert p.wins == 0

    def test_last_active_epoch_millis(self, normalizer):
        millis = int(FROZEN_NOW.timestamp() * 1000)
        p = normalizer.normalize_players([{"last_played": millis}])[0]
        assert p.last_active == "2025-06-01T12:00:00.000Z"

    def test_unparseable_last_active_dropped(self, normalizer):
        p = normalizer.normalize_players([{"last_active": "yesterday"}])[0]
        assert p.last_active is None

    def test_avatar_synonym(self, normalizer):
        p = normalizer.normalize_players([{"avatar_url": "https://cdn/a.png"}])[0]
        assert p.avatar == "https://cdn/a.png"

    def test_non_object_rows_skipped(self, normalizer):
        players = normalizer.normalize_players([None, 5, {"username": "ok"}])
        assert [p.username for p in players] == ["ok"]
        assert players[0].rank == 1


class TestSinglePlayer:
    def test_plain_object(self, normalizer):
        p = normalizer.normalize_player_stats({"user_id": "42", "name": "solo", "mmr": 600})
        assert p.id == "42"
        assert p.level == 3

    def test_wrapped_object(self, normalizer):
        p = normalizer.normalize_player_stats({"player": {"id": "42", "rating": 10}})
        assert p.id == "42"

    def test_list_matches_requested_id(self, normalizer):
        p = normalizer.normalize_player_stats({"players": ROWS}, "2")
        assert p.username == "beta"

    def test_list_without_requested_id(self, normalizer):
        assert normalizer.normalize_player_stats({"players": ROWS}, "999") is None
        assert normalizer.normalize_player_stats([{"user_id": "111", "username": "other"}], "999") is None

    def test_sole_row_without_id(self, normalizer):
        p = normalizer.normalize_player_stats([{"username": "solo", "rating": 300}], "999")
        assert p.username == "solo"

    def test_object_with_other_id(self, normalizer):
        assert normalizer.normalize_player_stats({"player": {"id": "1", "rating": 10}}, "2") is None
        assert normalizer.normalize_player_stats({"player": {"username": "anon"}}, "2").username == "anon"

    def test_unrecognized(self, normalizer):
        assert normalizer.normalize_player_stats({"error": "nope"}) is None
        assert extract_player("text") is None


class TestTeams:
    def test_queue_envelope(self, normalizer):
        joined = FROZEN_NOW - timedelta(seconds=5)
        payload = {
            "queue": [
                {"name": "Apes", "players": [{"rating": 600}, {"rating": 0}], "joinedAt": to_iso(joined)},
                {},
            ]
        }
        first, second = normalizer.normalize_teams(payload)
        assert first.team_name == "Apes"
        assert first.position == 1
        assert first.average_level == 2
        assert first.average_score == 300
        assert first.wait_time == 5000
        assert second.id == "2"
        assert second.team_name == "Team 2"
        assert second.position == 2
        assert second.wait_time == 0
        assert second.joined_at == to_iso(FROZEN_NOW)
        assert second.average_level == 1
        assert second.average_score == 0

    def test_teams_key(self, normalizer):
        teams = normalizer.normalize_teams({"teams": [{"teamName": "A"}]})
        assert teams[0].team_name == "A"

    def test_members_synonym(self, normalizer):
        team = normalizer.normalize_teams([{"members": ["ann", {"username": "bob", "rating": 300}]}])[0]
        assert [p.username for p in team.players] == ["ann", "bob"]
        assert team.average_score == 150

    def test_future_join_clamped(self, normalizer):
        team = normalizer.normalize_teams([{"timestamp": to_iso(FROZEN_NOW + timedelta(minutes=1))}])[0]
        assert team.wait_time == 0

    def test_epoch_seconds_join(self, normalizer):
        team = normalizer.normalize_teams([{"createdAt": int(FROZEN_NOW.timestamp()) - 60}])[0]
        assert team.wait_time == 60_000

    def test_unrecognized(self, normalizer):
        assert normalizer.normalize_teams({"status": "ok"}) == []
        with pytest.raises(NormalizationAmbiguity):
            normalizer.normalize_teams("oops", strict=True)


class TestGuildStats:
    def test_from_player_list(self, normalizer):
        stats = normalizer.normalize_guild_stats({"players": ROWS, "season": "S3"})
        assert stats.total_players == 2
        assert stats.total_games == 13
        assert stats.total_wins == 7
        assert stats.average_score == 675
        assert stats.top_player == "alpha"
        assert stats.raw == {"season": "S3"}

    def test_from_totals(self, normalizer):
        stats = normalizer.normalize_guild_stats({"player_count": 40, "total_matches": 120, "average_rating": 1500})
        assert stats.total_players == 40
        assert stats.total_games == 120
        assert stats.average_score == 1500
        assert stats.average_level == 6

    def test_error_body_is_not_stats(self):
        assert not has_stats({"message": "Unknown guild"})
        assert not has_stats({})
        assert not has_stats("ok")

    def test_stats_shapes_accepted(self):
        assert has_stats({"total_players": 42})
        assert has_stats({"avg_rating": 1200})
        assert has_stats([])
        assert has_stats({"data": {"players": ROWS}})


class TestSeasonsAndMatches:
    def test_seasons_mixed_items(self, normalizer):
        assert normalizer.normalize_seasons({"seasons": ["S1", {"name": "S2"}, 3, "S1"]}) == ["S1", "S2", "3"]

    def test_matches(self, normalizer):
        payload = {
            "matches": [
                {
                    "match_id": 99,
                    "queue_name": "5v5",
                    "winner": "Team 1",
                    "timestamp": "2025-06-01T11:00:00Z",
                    "teams": [[{"name": "a"}, {"name": "b"}], {"players": ["c"]}],
                }
            ]
        }
        match = normalizer.normalize_matches(payload)[0]
        assert match.id == "99"
        assert match.queue == "5v5"
        assert match.played_at == "2025-06-01T11:00:00.000Z"
        assert match.participants == ["a", "b", "c"]


class TestHelpers:
    def test_resolve_container_none(self):
        assert resolve_container(42, PLAYER_ENVELOPE) is None
        assert resolve_container({"leaderboard": "x"}, PLAYER_ENVELOPE) is None

    def test_parse_timestamp_naive_is_utc(self):
        assert parse_timestamp("2025-06-01T12:00:00") == FROZEN_NOW

    def test_parse_timestamp_invalid(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(True) is None

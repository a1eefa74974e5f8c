"""Tests for the placeholder data provider."""

from application.services.mock_data import MOCK_PLAYERS, MockDataProvider
from application.services.normalizer import ResponseNormalizer
from tests.fakes import frozen_clock


class TestMockLeaderboard:
    def setup_method(self):
        self.provider = MockDataProvider(frozen_clock)

    def test_has_fifteen_players(self):
        assert len(MOCK_PLAYERS) == 15
        assert len(self.provider.get_mock_leaderboard()) == 15

    def test_first_entry(self):
        first = self.provider.get_mock_leaderboard(10)[0]
        assert first.username == "ApeKing001"
        assert first.score == 15420
        assert first.wins == 128
        assert first.games_played == 150
        assert first.level == 52
        assert first.rank == 1
        assert first.id == "1"
        assert first.losses == 22
        assert first.win_rate == 85.3

    def test_limit(self):
        players = self.provider.get_mock_leaderboard(3)
        assert [p.username for p in players] == ["ApeKing001", "BananaMaster", "SquadLeader"]
        assert [p.rank for p in players] == [1, 2, 3]

    def test_limit_above_size(self):
        assert len(self.provider.get_mock_leaderboard(50)) == 15

    def test_last_active_uses_clock(self):
        assert {p.last_active for p in self.provider.get_mock_leaderboard()} == {"2025-06-01T12:00:00.000Z"}

    def test_same_shape_as_live_records(self):
        mock = self.provider.get_mock_leaderboard(1)[0].to_dict()
        live = ResponseNormalizer(frozen_clock).normalize_players([{"id": 9, "rating": 1}])[0].to_dict()
        assert mock.keys() == live.keys()
        assert [type(mock[k]) for k in ("id", "level", "rank")] == [type(live[k]) for k in ("id", "level", "rank")]

    def test_deterministic(self):
        assert self.provider.get_mock_leaderboard() == MockDataProvider(frozen_clock).get_mock_leaderboard()


class TestOtherPlaceholders:
    def setup_method(self):
        self.provider = MockDataProvider(frozen_clock)

    def test_player_lookup(self):
        assert self.provider.mock_player("2").username == "BananaMaster"
        assert self.provider.mock_player("topape").rank == 10
        assert self.provider.mock_player("nobody") is None

    def test_guild_stats(self):
        stats = self.provider.mock_guild_stats()
        assert stats.total_players == 15
        assert stats.total_wins == sum(row[2] for row in MOCK_PLAYERS)
        assert stats.top_player == "ApeKing001"

    def test_empty_collections(self):
        assert self.provider.mock_queue() == []
        assert self.provider.mock_seasons() == []
        assert self.provider.mock_matches() == []

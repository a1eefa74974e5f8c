"""CLI command wiring, driven through an injected client."""

import asyncio

import pytest

from application.services import AcquisitionClient
from presentation.cli.fetch_command import FetchCommand, build_parser
from tests.fakes import GUILD_ID, FakeTransport, frozen_clock, ok


def execute(config, transport, *argv):
    client = AcquisitionClient(config, transport=transport, clock=frozen_clock)
    command = FetchCommand(config, client=client)
    return asyncio.run(command.execute(build_parser().parse_args(list(argv))))


def test_leaderboard_command(config):
    transport = FakeTransport({f"/api/playerstats/{GUILD_ID}": ok([{"username": "alpha", "rating": 900}])})
    payload = execute(config, transport, "leaderboard", "--limit", "5")
    assert payload["source"] == "live"
    assert payload["endpoint"] == f"/api/playerstats/{GUILD_ID}"
    assert payload["data"][0]["username"] == "alpha"
    assert payload["data"][0]["level"] == 4


def test_status_command_does_not_touch_network(unconfigured, transport):
    payload = execute(unconfigured, transport, "status")
    assert payload["isConfigured"] is False
    assert payload["missing"] == ["NEATQUEUE_API_KEY", "DISCORD_GUILD_ID"]
    assert "Using mock data" in payload["message"]
    assert transport.calls == []


def test_queue_command_falls_back(config, transport):
    payload = execute(config, transport, "queue")
    assert payload == {"data": [], "source": "mock-fallback-on-error", "endpoint": None}


def test_injected_client_is_left_open(config, transport):
    execute(config, transport, "seasons")
    assert transport.closed is False


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])

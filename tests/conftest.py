"""Shared fixtures."""
from __future__ import annotations

import pytest

from config.client_config import ClientConfig
from tests.fakes import API_KEY, GUILD_ID, FakeTransport


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        base_url="https://api.neatqueue.test",
        api_key=API_KEY,
        guild_id=GUILD_ID,
        retry_attempts=0,
        retry_delay_ms=0,
    )


@pytest.fixture
def unconfigured() -> ClientConfig:
    return ClientConfig(base_url="https://api.neatqueue.test", api_key=None, guild_id=None)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()

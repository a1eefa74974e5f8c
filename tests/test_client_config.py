"""Tests for client configuration and status reporting."""

import dataclasses

import pytest

from config.client_config import ClientConfig
from domain.errors import ConfigurationError


class TestClientConfig:
    def test_configured_requires_key_and_guild(self):
        assert ClientConfig(api_key="k" * 12, guild_id="1").is_configured
        assert not ClientConfig(api_key="k" * 12).is_configured
        assert not ClientConfig(guild_id="1").is_configured
        assert not ClientConfig(api_key="  ", guild_id="1").is_configured

    @pytest.mark.parametrize("url", ["", "api.neatqueue.com", "ftp://api.neatqueue.com", "https://"])
    def test_malformed_base_url(self, url):
        with pytest.raises(ConfigurationError):
            ClientConfig(base_url=url)

    def test_trailing_slash_stripped(self):
        assert ClientConfig(base_url="https://api.neatqueue.com/").base_url == "https://api.neatqueue.com"

    def test_immutable(self):
        config = ClientConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.api_key = "x"

    def test_clamp_limit(self):
        config = ClientConfig()
        assert config.clamp_limit(None) == 50
        assert config.clamp_limit(0) == 1
        assert config.clamp_limit(500) == 100

    def test_status_reports_missing(self):
        status = ClientConfig(api_key="k" * 12).status()
        assert status.to_dict()["isConfigured"] is False
        assert status.to_dict()["hasCredential"] is True
        assert status.to_dict()["hasGuildId"] is False
        assert status.missing == ["DISCORD_GUILD_ID"]
        assert "Guild ID" not in status.message
        assert "DISCORD_GUILD_ID" in status.message

    def test_validation_warnings(self):
        report = ClientConfig(api_key="short", guild_id="abc").validate()
        assert report.valid
        assert "API key seems too short - may be invalid" in report.warnings
        assert "Guild ID should be numeric" in report.warnings

    def test_validation_errors(self):
        report = ClientConfig().validate()
        assert not report.valid
        assert report.errors == ["NEATQUEUE_API_KEY is required", "DISCORD_GUILD_ID is required"]

    def test_summary_redacts_key(self):
        summary = ClientConfig(api_key="abcdefghijklmnop", guild_id="1").summary()
        assert summary["api_key"] == "abcdefgh..."
        assert "ijklmnop" not in str(summary)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("NEATQUEUE_API_URL", "http://localhost:8080/")
        monkeypatch.setenv("NEATQUEUE_API_KEY", "k" * 12)
        monkeypatch.setenv("DISCORD_GUILD_ID", "42")
        config = ClientConfig.from_env()
        assert config.base_url == "http://localhost:8080"
        assert config.is_configured

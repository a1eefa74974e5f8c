"""Immutable client configuration and status reporting."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from domain.errors import ConfigurationError
from .settings import Settings, _int_env, settings as default_settings

_NUMERIC = re.compile(r"^\d+$")


@dataclass(slots=True)
class ConfigStatus:
    """Configuration status as reported to callers."""
    is_configured: bool
    has_credential: bool
    has_guild_id: bool
    base_url: str
    missing: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.is_configured:
            return "NeatQueue API is configured and ready."
        return f"NeatQueue API not configured. Missing: {', '.join(self.missing)}. Using mock data."

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isConfigured': self.is_configured,
            'hasCredential': self.has_credential,
            'hasGuildId': self.has_guild_id,
            'baseUrl': self.base_url,
            'missing': list(self.missing),
            'warnings': list(self.warnings),
        }


@dataclass(slots=True)
class ValidationReport:
    """Environment validation outcome."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Read-only configuration shared by every operation of a client."""
    base_url: str = 'https://api.neatqueue.com'
    api_key: Optional[str] = None
    guild_id: Optional[str] = None
    timeout_ms: int = 10_000
    retry_attempts: int = 3
    retry_delay_ms: int = 1_000
    retry_backoff: float = 2.0
    default_limit: int = 50
    max_limit: int = 100
    user_agent: str = 'ApeSquad-NeatQueue-Client/1.0'

    def __post_init__(self) -> None:
        raw = (self.base_url or '').strip()
        if not raw:
            raise ConfigurationError('base_url', 'must not be empty')
        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, TypeError) as exc:
            raise ConfigurationError('base_url', str(exc)) from exc
        if url.scheme not in ('http', 'https'):
            raise ConfigurationError('base_url', f"unsupported scheme {url.scheme!r} in {raw!r}")
        if not url.host:
            raise ConfigurationError('base_url', f"missing host in {raw!r}")
        if self.timeout_ms <= 0:
            raise ConfigurationError('timeout_ms', 'must be positive')
        if self.retry_attempts < 0 or self.retry_delay_ms < 0:
            raise ConfigurationError('retry', 'attempts and delay must be non-negative')
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'base_url', raw.rstrip('/'))
        object.__setattr__(self, 'api_key', (self.api_key or '').strip() or None)
        object.__setattr__(self, 'guild_id', (self.guild_id or '').strip() or None)

    @classmethod
    def from_settings(cls, s: Settings = default_settings) -> "ClientConfig":
        return cls(
            base_url=s.NEATQUEUE_API_URL,
            api_key=s.NEATQUEUE_API_KEY,
            guild_id=s.DISCORD_GUILD_ID,
            timeout_ms=s.REQUEST_TIMEOUT_MS,
            retry_attempts=s.RETRY_ATTEMPTS,
            retry_delay_ms=s.RETRY_DELAY_MS,
            retry_backoff=s.RETRY_BACKOFF,
            default_limit=s.DEFAULT_LIMIT,
            max_limit=s.MAX_LIMIT,
            user_agent=s.USER_AGENT,
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from a fresh read of the environment."""
        return cls(
            base_url=os.getenv('NEATQUEUE_API_URL', Settings.NEATQUEUE_API_URL),
            api_key=os.getenv('NEATQUEUE_API_KEY'),
            guild_id=os.getenv('DISCORD_GUILD_ID'),
            timeout_ms=_int_env('NEATQUEUE_TIMEOUT_MS', Settings.REQUEST_TIMEOUT_MS),
            retry_attempts=_int_env('NEATQUEUE_RETRY_ATTEMPTS', Settings.RETRY_ATTEMPTS),
            retry_delay_ms=_int_env('NEATQUEUE_RETRY_DELAY_MS', Settings.RETRY_DELAY_MS),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.guild_id)

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        # limit=0 still yields one row, not an empty page
        return max(1, min(int(limit), self.max_limit))

    def status(self) -> ConfigStatus:
        missing: List[str] = []
        if not self.api_key:
            missing.append('NEATQUEUE_API_KEY')
        if not self.guild_id:
            missing.append('DISCORD_GUILD_ID')
        return ConfigStatus(
            is_configured=self.is_configured,
            has_credential=bool(self.api_key),
            has_guild_id=bool(self.guild_id),
            base_url=self.base_url,
            missing=missing,
            warnings=self.validate().warnings,
        )

    def validate(self) -> ValidationReport:
        report = ValidationReport(valid=True)
        if not self.api_key:
            report.errors.append('NEATQUEUE_API_KEY is required')
        if not self.guild_id:
            report.errors.append('DISCORD_GUILD_ID is required')
        if self.api_key and len(self.api_key) < 10:
            report.warnings.append('API key seems too short - may be invalid')
        if self.guild_id and not _NUMERIC.match(self.guild_id):
            report.warnings.append('Guild ID should be numeric')
        report.valid = not report.errors
        return report

    def summary(self) -> Dict[str, Any]:
        """Redacted view for debug logging."""
        return {
            'api_key': f"{self.api_key[:8]}..." if self.api_key else 'not set',
            'guild_id': self.guild_id or 'not set',
            'base_url': self.base_url,
            'is_configured': self.is_configured,
        }

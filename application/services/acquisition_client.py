"""Resilient acquisition client for the NeatQueue Discord bot API."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from config.client_config import ClientConfig, ConfigStatus, ValidationReport
from core.logging.context import operation_context
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import AcquisitionResult, GuildStats, MatchRecord, PlayerRecord, TeamRecord
from domain.enums import Provenance, Resource
from domain.errors import AllCandidatesExhausted, TransportError
from domain.interfaces import Clock, ITransport, utc_now
from infrastructure.api import EndpointProbe, HttpxTransport, ProbeRequest, RequestOutcome, RetryPolicy
from .mock_data import MockDataProvider
from .normalizer import ResponseNormalizer, extract_player
from .operations import DISCOVERY_PATHS, OPERATIONS


@dataclass(slots=True)
class EndpointReport:
    """Result of hitting one path during discovery."""
    path: str
    success: bool
    status_code: Optional[int] = None
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "status": self.status_code, "data": self.data}
        return {"success": False, "status": self.status_code, "error": self.error}


class AcquisitionClient:
    """Fetches rankings and queue data, degrading to placeholder data.

    Every ``get_*`` coroutine returns an ``AcquisitionResult``: live data
    from the first candidate endpoint that answers, or placeholder data
    tagged ``mock-unconfigured`` / ``mock-fallback-on-error``. None of them
    raise on upstream failure. Instances share no mutable state, so several
    differently-configured clients can coexist.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[ITransport] = None,
        clock: Clock = utc_now,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger(__name__)
        self.transport = transport or HttpxTransport(RetryPolicy.from_config(config), logger=self.logger)
        self.probe = EndpointProbe(
            self.transport,
            config.base_url,
            self._auth_headers(),
            config.timeout_s,
            logger=self.logger,
        )
        self.normalizer = ResponseNormalizer(clock)
        self.mock = MockDataProvider(clock)
        self.logger.debug(lambda: "client-configured", extra={"operation": "init", "status": config.summary()})

    async def __aenter__(self) -> "AcquisitionClient":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    def _auth_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    # ── Configuration ──────────────────────────────────────────────────

    def is_configured(self) -> bool:
        return self.config.is_configured

    def config_status(self) -> ConfigStatus:
        return self.config.status()

    def validate_environment(self) -> ValidationReport:
        return self.config.validate()

    # ── Orchestration helpers ──────────────────────────────────────────

    async def _probe(
        self,
        resource: Resource,
        *,
        query: Optional[Dict[str, Any]] = None,
        cancel: Optional[asyncio.Event] = None,
        accept: Optional[Callable[[Any], bool]] = None,
        **params: Any,
    ) -> RequestOutcome:
        descriptor = OPERATIONS[resource]
        return await self.probe.probe(
            descriptor.render(guild_id=self.config.guild_id, **params),
            ProbeRequest(query=dict(query or {})),
            accept=accept or descriptor.accept,
            operation=resource.value,
            cancel=cancel,
        )

    def _unconfigured(self, resource: Resource, data: Any) -> AcquisitionResult:
        self.logger.info(
            lambda: "acquisition-mock",
            extra={"operation": resource.value, "provenance": Provenance.MOCK_UNCONFIGURED.value,
                   "error": ", ".join(self.config.status().missing)},
        )
        return AcquisitionResult(data, Provenance.MOCK_UNCONFIGURED)

    def _live(self, resource: Resource, data: Any, endpoint: str) -> AcquisitionResult:
        self.logger.info(
            lambda: "acquisition-live",
            extra={"operation": resource.value, "endpoint": endpoint, "provenance": Provenance.LIVE.value,
                   "records": len(data) if isinstance(data, list) else None},
        )
        return AcquisitionResult(data, Provenance.LIVE, source=endpoint)

    def _fallback(self, resource: Resource, data: Any, outcome: RequestOutcome, **meta: Any) -> AcquisitionResult:
        exhausted = AllCandidatesExhausted(resource.value, getattr(outcome, "last_error", None))
        self.logger.warning(
            lambda: "acquisition-mock",
            extra={"operation": resource.value, "provenance": Provenance.MOCK_FALLBACK.value, "error": str(exhausted)},
        )
        return AcquisitionResult(
            data,
            Provenance.MOCK_FALLBACK,
            source=meta.pop("source", None),
            meta={"error": str(exhausted), "tried": list(getattr(outcome, "tried", [])), **meta},
        )

    # ── Resources ──────────────────────────────────────────────────────

    async def get_leaderboard(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        season: Optional[str] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AcquisitionResult[List[PlayerRecord]]:
        """Ranked players; live rows are paged client-side by ``offset``/``limit``."""
        resource = Resource.LEADERBOARD
        limit = self.config.clamp_limit(limit)
        offset = max(0, int(offset or 0))
        with operation_context(operation=resource.value, guild=self.config.guild_id):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.get_mock_leaderboard(limit))

            outcome = await self._probe(resource, query={"season": season}, cancel=cancel)
            if outcome.ok:
                players = self.normalizer.normalize_players(outcome.payload)
                return self._live(resource, players[offset:offset + limit], outcome.endpoint)

            # No guild leaderboard; global stats at least prove the service is up.
            self.logger.warning(lambda: "leaderboard-global-stats-fallback", extra={"operation": resource.value})
            stats = await self._probe(Resource.GLOBAL_STATS, cancel=cancel)
            if stats.ok:
                return self._fallback(
                    resource,
                    self.mock.leaderboard_from_stats(stats.payload, limit),
                    outcome,
                    source=stats.endpoint,
                    stats=stats.payload,
                )
            return self._fallback(resource, self.mock.get_mock_leaderboard(limit), outcome)

    async def get_player_stats(
        self,
        player_id: str,
        season: Optional[str] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AcquisitionResult[Optional[PlayerRecord]]:
        """One player's record; ``data`` is None when the player is not found."""
        resource = Resource.PLAYER_STATS
        with operation_context(operation=resource.value, guild=self.config.guild_id, player=str(player_id)):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_player(player_id))
            outcome = await self._probe(
                resource,
                query={"season": season},
                cancel=cancel,
                accept=lambda payload: extract_player(payload, str(player_id)) is not None,
                player_id=player_id,
            )
            if outcome.ok:
                player = self.normalizer.normalize_player_stats(outcome.payload, str(player_id))
                return self._live(resource, player, outcome.endpoint)
            return self._fallback(resource, self.mock.mock_player(player_id), outcome)

    async def get_guild_stats(
        self,
        season: Optional[str] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AcquisitionResult[GuildStats]:
        resource = Resource.GUILD_STATS
        with operation_context(operation=resource.value, guild=self.config.guild_id):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_guild_stats())
            outcome = await self._probe(resource, query={"season": season}, cancel=cancel)
            if outcome.ok:
                return self._live(resource, self.normalizer.normalize_guild_stats(outcome.payload), outcome.endpoint)
            return self._fallback(resource, self.mock.mock_guild_stats(), outcome)

    async def get_global_stats(self, *, cancel: Optional[asyncio.Event] = None) -> AcquisitionResult[GuildStats]:
        """Service-wide stats, not scoped to the configured guild."""
        resource = Resource.GLOBAL_STATS
        with operation_context(operation=resource.value):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_guild_stats())
            outcome = await self._probe(resource, cancel=cancel)
            if outcome.ok:
                return self._live(resource, self.normalizer.normalize_guild_stats(outcome.payload), outcome.endpoint)
            return self._fallback(resource, self.mock.mock_guild_stats(), outcome)

    async def get_seasons(self, *, cancel: Optional[asyncio.Event] = None) -> AcquisitionResult[List[str]]:
        resource = Resource.SEASONS
        with operation_context(operation=resource.value, guild=self.config.guild_id):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_seasons())
            outcome = await self._probe(resource, cancel=cancel)
            if outcome.ok:
                return self._live(resource, self.normalizer.normalize_seasons(outcome.payload), outcome.endpoint)
            return self._fallback(resource, self.mock.mock_seasons(), outcome)

    async def get_recent_matches(
        self,
        limit: int = 20,
        offset: int = 0,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AcquisitionResult[List[MatchRecord]]:
        resource = Resource.MATCHES
        limit = self.config.clamp_limit(limit)
        offset = max(0, int(offset or 0))
        with operation_context(operation=resource.value, guild=self.config.guild_id):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_matches())
            outcome = await self._probe(resource, query={"limit": limit, "offset": offset}, cancel=cancel)
            if outcome.ok:
                matches = self.normalizer.normalize_matches(outcome.payload)
                return self._live(resource, matches[:limit], outcome.endpoint)
            return self._fallback(resource, self.mock.mock_matches(), outcome)

    async def get_queue(
        self,
        limit: Optional[int] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AcquisitionResult[List[TeamRecord]]:
        """Teams currently queued, in queue order."""
        resource = Resource.QUEUE
        limit = self.config.clamp_limit(limit)
        with operation_context(operation=resource.value, guild=self.config.guild_id):
            if not self.is_configured():
                return self._unconfigured(resource, self.mock.mock_queue())
            outcome = await self._probe(resource, cancel=cancel)
            if outcome.ok:
                teams = self.normalizer.normalize_teams(outcome.payload)
                return self._live(resource, teams[:limit], outcome.endpoint)
            return self._fallback(resource, self.mock.mock_queue(), outcome)

    # ── Discovery ──────────────────────────────────────────────────────

    async def discover_endpoints(self) -> Dict[str, EndpointReport]:
        """Hit every well-known root path once and report what answered.

        Unlike the resource operations this does not stop at the first
        success. Returns an empty report when unconfigured.
        """
        reports: Dict[str, EndpointReport] = {}
        if not self.is_configured():
            self.logger.warning(lambda: "discovery-skipped", extra={"operation": "discover", "error": "not configured"})
            return reports
        with operation_context(operation="discover"):
            for path in DISCOVERY_PATHS:
                url = self.probe.build_url(path)
                try:
                    response = await self.transport.send("GET", url, self.probe.headers, self.config.timeout_s)
                except TransportError as exc:
                    reports[path] = EndpointReport(path, success=False, error=exc.reason)
                    continue
                if response.ok:
                    reports[path] = EndpointReport(path, success=True, status_code=response.status_code, data=response.body)
                else:
                    reports[path] = EndpointReport(
                        path, success=False, status_code=response.status_code, error=str(response.body)[:200]
                    )
            self.logger.info(
                lambda: "discovery-complete",
                extra={"operation": "discover", "records": sum(1 for r in reports.values() if r.success)},
            )
        return reports

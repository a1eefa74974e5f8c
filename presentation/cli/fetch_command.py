from __future__ import annotations

import argparse
import json
from typing import Any, Iterable, List, Optional

from application.services import AcquisitionClient
from config.client_config import ClientConfig
from core.logging.logger import StructuredLogger, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="neatqueue", description="Fetch NeatQueue rankings as JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    lb = sub.add_parser("leaderboard", help="ranked players")
    lb.add_argument("--limit", type=int, default=None)
    lb.add_argument("--offset", type=int, default=0)
    lb.add_argument("--season", default=None)

    player = sub.add_parser("player", help="one player's stats")
    player.add_argument("player_id")
    player.add_argument("--season", default=None)

    stats = sub.add_parser("stats", help="guild statistics")
    stats.add_argument("--season", default=None)

    sub.add_parser("seasons", help="available seasons")

    matches = sub.add_parser("matches", help="recent matches")
    matches.add_argument("--limit", type=int, default=20)
    matches.add_argument("--offset", type=int, default=0)

    queue = sub.add_parser("queue", help="teams waiting in queue")
    queue.add_argument("--limit", type=int, default=None)

    sub.add_parser("status", help="configuration status")
    sub.add_parser("discover", help="probe well-known API paths")
    return parser


class FetchCommand:
    """Runs one client operation and prints its JSON result."""

    def __init__(self, config: Optional[ClientConfig] = None, client: Optional[AcquisitionClient] = None) -> None:
        self.config = config or ClientConfig.from_settings()
        self.client = client
        self.logger: StructuredLogger = get_logger(__name__, service="cli")

    async def execute(self, args: argparse.Namespace) -> Any:
        client = self.client or AcquisitionClient(self.config, logger=self.logger)
        try:
            if args.command == "status":
                return {**client.config_status().to_dict(), "message": client.config_status().message}
            if args.command == "discover":
                reports = await client.discover_endpoints()
                return {
                    "success": client.is_configured(),
                    "config": client.config_status().to_dict(),
                    "endpoints": {path: r.to_dict() for path, r in reports.items()},
                }
            if args.command == "leaderboard":
                result = await client.get_leaderboard(args.limit, args.offset, args.season)
            elif args.command == "player":
                result = await client.get_player_stats(args.player_id, args.season)
            elif args.command == "stats":
                result = await client.get_guild_stats(args.season)
            elif args.command == "seasons":
                result = await client.get_seasons()
            elif args.command == "matches":
                result = await client.get_recent_matches(args.limit, args.offset)
            else:
                result = await client.get_queue(args.limit)
            return result.to_dict()
        finally:
            if self.client is None:
                await client.aclose()


async def run(argv: Optional[Iterable[str]] = None) -> int:
    args = build_parser().parse_args(list(argv or []))
    payload = await FetchCommand().execute(args)
    print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))
    return 0

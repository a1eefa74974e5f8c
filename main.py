"""Main CLI entry-point."""
from __future__ import annotations

import asyncio
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings


def main(argv: list[str]) -> int:
    bootstrap_logging(
        service="neatqueue",
        level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="neatqueue.jsonl",
    )
    try:
        from presentation.cli import run
        return asyncio.run(run(argv))
    finally:
        shutdown_logging()


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())

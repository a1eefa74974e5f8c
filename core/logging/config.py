from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler, QueueHandler, QueueListener
from queue import Queue
from pathlib import Path
from typing import Optional

from .levels import register_levels, to_level
from .formatter import ConsoleFormatter, JSONFormatter

_listener: QueueListener | None = None


def bootstrap_logging(
    *,
    service: str = "neatqueue",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "neatqueue.jsonl",
    console: Optional[bool] = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Configure the root logger: console events plus optional JSON-lines file."""
    global _listener
    shutdown_logging()
    register_levels()
    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)

    if console is None:
        console = os.getenv("LOG_CONSOLE", "true").strip().lower() == "true"
    if console:
        stream = logging.StreamHandler()
        console_level_str = os.getenv("LOG_CONSOLE_LEVEL", "")
        stream.setLevel(to_level(console_level_str) if console_level_str else lvl)
        stream.setFormatter(ConsoleFormatter())
        root.addHandler(stream)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        json_handler = RotatingFileHandler(str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count)
        json_handler.setLevel(lvl)
        json_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        root.addHandler(QueueHandler(q))
        _listener = QueueListener(q, json_handler, respect_handler_level=True)
        _listener.start()

    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))
    logging.getLogger(__name__).debug("logging configured", extra={"service": service})


def shutdown_logging() -> None:
    global _listener
    if _listener:
        _listener.stop()
        _listener = None

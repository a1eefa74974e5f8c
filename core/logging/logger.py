from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from .levels import LogLevel


class SupportsStr(Protocol):
    def __str__(self) -> str: ...


LazyMessage = SupportsStr | Callable[[], SupportsStr]


class StructuredLogger:
    """Leveled event logger; messages may be lazy callables."""

    def __init__(self, logger: logging.Logger, service: Optional[str] = None) -> None:
        self._logger = logger
        self._service = service

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        message = msg() if callable(msg) else msg
        extra = dict(kwargs.pop("extra", None) or {})
        if self._service and "service" not in extra:
            extra["service"] = self._service
        self._logger.log(level, str(message), *args, extra=extra, **kwargs)

    def trace(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(int(LogLevel.TRACE), msg, *args, **kwargs)

    def debug(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def success(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(int(LogLevel.SUCCESS), msg, *args, **kwargs)

    def warning(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: LazyMessage, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)


def get_logger(name: str, *, service: Optional[str] = "neatqueue") -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name), service=service)

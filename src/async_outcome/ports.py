from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@runtime_checkable
class Port(Protocol):
    """
    Marker protocol for async_outcome ports (dependencies).
    Ports define behavior (contracts) that holders depend on.
    """


@runtime_checkable
class LoggerPort(Port, Protocol):
    """
    Minimal structured logger port. Accepts a message and optional contextual fields.

    `is_enabled_for(level)` lets callers skip building expensive fields;
    levels are "debug", "info", "warning" and "error".
    """

    def is_enabled_for(self, level: str) -> bool: ...
    def debug(self, msg: str, **fields: Any) -> None: ...
    def info(self, msg: str, **fields: Any) -> None: ...
    def warning(self, msg: str, **fields: Any) -> None: ...
    def error(self, msg: str, **fields: Any) -> None: ...


class StdlibLogger(LoggerPort):
    """
    LoggerPort backed by the standard `logging` module.

    Fields are appended to the message as key=value pairs and also passed
    through `extra={"fields": ...}` for handlers that want them structured.
    """

    def __init__(self, name: str = "async_outcome") -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def is_enabled_for(self, level: str) -> bool:
        return self._logger.isEnabledFor(_LEVELS[level])

    def _log(self, level: int, msg: str, fields: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{k}={v!r}" for k, v in fields.items())
            msg = f"{msg} {rendered}"
        self._logger.log(level, msg, extra={"fields": fields})

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, fields)

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from async_outcome.outcome import AsyncOutcome
from async_outcome.ports import LoggerPort

T = TypeVar("T")


class CapturingLogger(LoggerPort):
    """
    Test logger that captures log records for assertions.
    Records below `level` are dropped, and `is_enabled_for` reports them as off.
    """

    _ORDER = ("debug", "info", "warning", "error")

    def __init__(self, level: str = "debug") -> None:
        self.level = level
        self.records: List[Dict[str, Any]] = []

    def is_enabled_for(self, level: str) -> bool:
        return self._ORDER.index(level) >= self._ORDER.index(self.level)

    def _push(self, level: str, msg: str, **fields: Any) -> None:
        if not self.is_enabled_for(level):
            return
        rec = {"level": level, "msg": msg, **fields}
        self.records.append(rec)

    def debug(self, msg: str, **fields: Any) -> None:
        self._push("debug", msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._push("info", msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._push("warning", msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._push("error", msg, **fields)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [r["msg"] for r in self.records if level is None or r["level"] == level]


class RecordingListener(Generic[T]):
    """
    Listener capturing every outcome published by a holder.
    """

    def __init__(self) -> None:
        self._outcomes: List[AsyncOutcome[T]] = []

    def __call__(self, outcome: AsyncOutcome[T]) -> None:
        self._outcomes.append(outcome)

    @property
    def outcomes(self) -> Sequence[AsyncOutcome[T]]:
        return tuple(self._outcomes)

    @property
    def last(self) -> Optional[AsyncOutcome[T]]:
        return self._outcomes[-1] if self._outcomes else None

    def clear(self) -> None:
        self._outcomes.clear()


class CountingCanceller:
    """
    Canceller stub that counts how many times cancellation was requested.
    """

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1

    @property
    def called(self) -> bool:
        return self.calls > 0


__all__ = ["CapturingLogger", "RecordingListener", "CountingCanceller"]

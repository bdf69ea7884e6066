import logging

from .errors import (
    ClosedUnionError,
    InvalidFailure,
    InvalidOutcome,
    InvalidProgress,
    InvalidState,
    OutcomeError,
)
from .holder import OutcomeHolder
from .outcome import (
    AsyncOutcome,
    Canceller,
    Failed,
    Loaded,
    Loading,
    guard,
    guard_sync,
)
from .ports import LoggerPort, StdlibLogger
from .types import to_serializable

logging.getLogger("async_outcome").addHandler(logging.NullHandler())

__all__ = [
    "AsyncOutcome",
    "Loaded",
    "Loading",
    "Failed",
    "Canceller",
    "guard",
    "guard_sync",
    "OutcomeHolder",
    "LoggerPort",
    "StdlibLogger",
    "to_serializable",
    "OutcomeError",
    "InvalidOutcome",
    "InvalidProgress",
    "InvalidFailure",
    "InvalidState",
    "ClosedUnionError",
]

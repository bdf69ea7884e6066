from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass
class OutcomeError(Exception):
    """
    Base error for async_outcome.
    Carries a stable `code`, human-readable `message`,
    and optional serializable `details`.

    These signal programming errors (misuse of the API). Failures of the
    asynchronous work itself are never raised: they are represented as `Failed`.
    """

    code: str
    message: str
    details: Optional[Mapping[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        base = f"{self.code}: {self.message}"
        if self.details:
            return f"{base} details={dict(self.details)}"
        return base


# Construction errors ---------------------------------------------------------


@dataclass
class InvalidOutcome(OutcomeError):
    """
    Base class for rejected outcome construction.
    """

    def __init__(
        self, message: str, details: Optional[Mapping[str, Any]] = None
    ) -> None:
        super().__init__(code="invalid_outcome", message=message, details=details)


@dataclass
class InvalidProgress(InvalidOutcome):
    def __init__(
        self,
        message: str = "progress must be a real number",
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        OutcomeError.__init__(
            self, code="invalid_progress", message=message, details=details
        )


@dataclass
class InvalidFailure(InvalidOutcome):
    def __init__(
        self,
        message: str = "error must be an exception instance",
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        OutcomeError.__init__(
            self, code="invalid_failure", message=message, details=details
        )


@dataclass
class InvalidState(InvalidOutcome):
    def __init__(
        self,
        message: str = "state must be an AsyncOutcome",
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        OutcomeError.__init__(
            self, code="invalid_state", message=message, details=details
        )


# Type-level errors -----------------------------------------------------------


@dataclass
class ClosedUnionError(OutcomeError, TypeError):
    """
    Raised when code outside the outcome module tries to extend the union.
    """

    def __init__(
        self,
        message: str = "AsyncOutcome is closed to extension",
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        OutcomeError.__init__(
            self, code="closed_union", message=message, details=details
        )

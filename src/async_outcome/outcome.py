from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from types import TracebackType
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from .errors import ClosedUnionError, InvalidFailure, InvalidProgress

T = TypeVar("T")
R = TypeVar("R")

Canceller = Callable[[], None]


class AsyncOutcome(Generic[T], ABC):
    """
    The state of an asynchronous computation at a single point in time.

    An outcome is exactly one of:

      - Loaded(value): the computation completed with `value` (which may be None)
      - Loading(progress, canceller): still running, `progress` is in [0, 1]
      - Failed(error, stack_trace): the computation raised `error`

    The set of variants is closed: only this module may subclass AsyncOutcome.

    Pattern matching:

        match outcome:
            case Loaded(value):
                ...
            case Loading(progress):
                ...
            case Failed(error, trace):
                ...

    Exhaustive dispatch without pattern matching:

        outcome.match(
            on_loaded=lambda value: render(value),
            on_failed=lambda error, trace: render_error(error),
            on_loading=lambda progress: spinner(progress),
        )

    Every combinator is pure and never raises, except `unwrap_or_none`, which
    re-raises the original error of a Failed outcome.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        if cls.__module__ != __name__:
            raise ClosedUnionError(
                details={"subclass": f"{cls.__module__}.{cls.__qualname__}"}
            )
        super().__init_subclass__(**kwargs)

    # --- Adapters ---

    @staticmethod
    async def guard(operation: Callable[[], Awaitable[T]]) -> "AsyncOutcome[T]":
        """
        Await `operation()` and capture its result as an outcome.

        Instead of:

            holder.state = Loading(0)
            try:
                holder.state = Loaded(await fetch())
            except Exception as exc:
                holder.state = Failed(exc, exc.__traceback__)

        write:

            holder.state = Loading(0)
            holder.state = await AsyncOutcome.guard(fetch)

        Exceptions raised by the operation become Failed and are never re-raised.
        Cancellation and interpreter exits (BaseException outside Exception)
        are not failures of the operation and propagate.
        """
        try:
            return Loaded(await operation())
        except Exception as exc:
            return Failed(exc, exc.__traceback__)

    @staticmethod
    def guard_sync(operation: Callable[[], T]) -> "AsyncOutcome[T]":
        """Synchronous counterpart of `guard` for plain callables."""
        return _capture(operation)

    # --- Predicates ---

    def is_loaded(self) -> bool:
        return isinstance(self, Loaded)

    def is_loading(self) -> bool:
        return isinstance(self, Loading)

    def is_failed(self) -> bool:
        return isinstance(self, Failed)

    # --- Dispatch primitive ---

    @abstractmethod
    def _dispatch(
        self,
        on_loaded: Callable[["Loaded[T]"], R],
        on_failed: Callable[["Failed[T]"], R],
        on_loading: Callable[["Loading[T]"], R],
    ) -> R:
        """Invoke the one callable matching this variant with the variant itself."""
        raise NotImplementedError

    # --- Value-level matching ---

    def match(
        self,
        on_loaded: Callable[[T], R],
        on_failed: Callable[[BaseException, Optional[TracebackType]], R],
        on_loading: Callable[[float], R],
    ) -> R:
        """
        Perform an action based on the state of the outcome.

        All cases are required.
        """
        return self._dispatch(
            lambda d: on_loaded(d.value),
            lambda e: on_failed(e.error, e.stack_trace),
            lambda lo: on_loading(lo.progress),
        )

    def match_or_else(
        self,
        *,
        on_loaded: Optional[Callable[[T], R]] = None,
        on_failed: Optional[
            Callable[[BaseException, Optional[TracebackType]], R]
        ] = None,
        on_loading: Optional[Callable[[float], R]] = None,
        or_else: Callable[[], R],
    ) -> R:
        """
        Like `match`, but unhandled states fall back to `or_else()`.
        """

        def loaded(d: Loaded[T]) -> R:
            if on_loaded is not None:
                return on_loaded(d.value)
            return or_else()

        def failed(e: Failed[T]) -> R:
            if on_failed is not None:
                return on_failed(e.error, e.stack_trace)
            return or_else()

        def loading(lo: Loading[T]) -> R:
            if on_loading is not None:
                return on_loading(lo.progress)
            return or_else()

        return self._dispatch(loaded, failed, loading)

    def match_or_none(
        self,
        *,
        on_loaded: Optional[Callable[[T], R]] = None,
        on_failed: Optional[
            Callable[[BaseException, Optional[TracebackType]], R]
        ] = None,
        on_loading: Optional[Callable[[float], R]] = None,
    ) -> Optional[R]:
        """Like `match_or_else` where `or_else` returns None."""
        return self.match_or_else(
            on_loaded=on_loaded,
            on_failed=on_failed,
            on_loading=on_loading,
            or_else=lambda: None,
        )

    # --- Variant-level matching ---

    def map(
        self,
        on_loaded: Callable[["Loaded[T]"], R],
        on_failed: Callable[["Failed[T]"], R],
        on_loading: Callable[["Loading[T]"], R],
    ) -> R:
        """
        Like `match`, but handlers receive the variant instance itself,
        exposing fields such as `Loading.canceller`.
        """
        return self._dispatch(on_loaded, on_failed, on_loading)

    def map_or_else(
        self,
        *,
        on_loaded: Optional[Callable[["Loaded[T]"], R]] = None,
        on_failed: Optional[Callable[["Failed[T]"], R]] = None,
        on_loading: Optional[Callable[["Loading[T]"], R]] = None,
        or_else: Callable[[], R],
    ) -> R:
        return self._dispatch(
            on_loaded if on_loaded is not None else lambda _: or_else(),
            on_failed if on_failed is not None else lambda _: or_else(),
            on_loading if on_loading is not None else lambda _: or_else(),
        )

    def map_or_none(
        self,
        *,
        on_loaded: Optional[Callable[["Loaded[T]"], R]] = None,
        on_failed: Optional[Callable[["Failed[T]"], R]] = None,
        on_loading: Optional[Callable[["Loading[T]"], R]] = None,
    ) -> Optional[R]:
        return self.map_or_else(
            on_loaded=on_loaded,
            on_failed=on_failed,
            on_loading=on_loading,
            or_else=lambda: None,
        )

    # --- Transformations ---

    def map_value(self, fn: Callable[[T], R]) -> "AsyncOutcome[R]":
        """
        Transform the value of a Loaded outcome.

        If `fn` raises, the result is Failed with that error.
        Failed outcomes keep their error and trace. Loading outcomes keep
        their progress; the canceller is not carried over.
        """
        return self._dispatch(
            lambda d: _capture(lambda: fn(d.value)),
            lambda e: Failed(e.error, e.stack_trace),
            lambda lo: Loading(lo.progress),
        )

    # --- Accessors ---

    @property
    def as_loaded(self) -> Optional["Loaded[T]"]:
        """This outcome if it is Loaded, else None."""
        return self._dispatch(lambda d: d, lambda e: None, lambda lo: None)

    def unwrap_or_none(self) -> Optional[T]:
        """
        Read the value synchronously.

        Loaded returns the value and Loading returns None.
        Failed RE-RAISES the original error object; this is the only
        method of the outcome API that can raise.
        """

        def failed(e: Failed[T]) -> Optional[T]:
            raise e.error

        return self._dispatch(lambda d: d.value, failed, lambda lo: None)


@dataclass(frozen=True, slots=True)
class Loaded(AsyncOutcome[T]):
    """Completed outcome. `value` may be None."""

    value: T

    def _dispatch(
        self,
        on_loaded: Callable[["Loaded[T]"], R],
        on_failed: Callable[["Failed[T]"], R],
        on_loading: Callable[["Loading[T]"], R],
    ) -> R:
        return on_loaded(self)


@dataclass(frozen=True, slots=True)
class Loading(AsyncOutcome[T]):
    """
    In-flight outcome.

    `progress` is clamped into [0, 1]. `canceller`, when present, requests
    the producer to abort; it is never called by this library and does not
    take part in equality.
    """

    progress: float
    canceller: Optional[Canceller] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        progress = self.progress
        if isinstance(progress, bool) or not isinstance(progress, (Real, Decimal)):
            raise InvalidProgress(details={"progress": repr(progress)})
        try:
            value = float(progress)
        except OverflowError:
            value = math.inf if progress > 0 else -math.inf
        except ValueError:
            raise InvalidProgress(details={"progress": repr(progress)}) from None
        if math.isnan(value):
            raise InvalidProgress("progress must not be NaN")
        object.__setattr__(self, "progress", min(max(value, 0.0), 1.0))

    def _dispatch(
        self,
        on_loaded: Callable[["Loaded[T]"], R],
        on_failed: Callable[["Failed[T]"], R],
        on_loading: Callable[["Loading[T]"], R],
    ) -> R:
        return on_loading(self)


@dataclass(frozen=True, slots=True)
class Failed(AsyncOutcome[T]):
    """Outcome of a computation that raised. `error` is never None."""

    error: BaseException
    stack_trace: Optional[TracebackType] = None

    def __post_init__(self) -> None:
        if self.error is None:
            raise InvalidFailure("error must not be None")
        if not isinstance(self.error, BaseException):
            raise InvalidFailure(details={"error": repr(self.error)})
        if self.stack_trace is not None and not isinstance(
            self.stack_trace, TracebackType
        ):
            raise InvalidFailure(
                "stack_trace must be a traceback",
                {"stack_trace": repr(self.stack_trace)},
            )

    def _dispatch(
        self,
        on_loaded: Callable[["Loaded[T]"], R],
        on_failed: Callable[["Failed[T]"], R],
        on_loading: Callable[["Loading[T]"], R],
    ) -> R:
        return on_failed(self)


def _capture(operation: Callable[[], T]) -> AsyncOutcome[T]:
    try:
        return Loaded(operation())
    except Exception as exc:
        return Failed(exc, exc.__traceback__)


guard = AsyncOutcome.guard
guard_sync = AsyncOutcome.guard_sync

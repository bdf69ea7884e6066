from __future__ import annotations

from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar

from .errors import InvalidState
from .outcome import AsyncOutcome, Canceller, Failed, Loading
from .ports import LoggerPort, StdlibLogger
from .types import to_serializable

T = TypeVar("T")

Listener = Callable[[AsyncOutcome[T]], None]


class OutcomeHolder(Generic[T]):
    """
    Owns the "current outcome" of one asynchronous value and republishes it.

    Outcomes are immutable; every transition replaces the held instance and
    notifies listeners synchronously, in subscription order.

    Usage:
        holder = OutcomeHolder[User]()
        unsubscribe = holder.listen(render)

        await holder.load(fetch_user, canceller=task.cancel)
        # listeners saw Loading(0.0), then Loaded(user) or Failed(error)

    Execution contract:
      - load() never raises for failures of the operation (see AsyncOutcome.guard)
      - the most recently started load() wins: an earlier load that settles
        later returns its outcome without publishing it
      - exceptions raised by listeners propagate to whoever changed the state,
        after the new state has been stored
      - cancel() only forwards the request to the current Loading.canceller
    """

    def __init__(
        self,
        initial: Optional[AsyncOutcome[T]] = None,
        *,
        logger: Optional[LoggerPort] = None,
    ) -> None:
        if initial is None:
            initial = Loading(0.0)
        self._check(initial)
        self._state: AsyncOutcome[T] = initial
        # keyed by a per-subscription token so the same callable may subscribe twice
        self._listeners: Dict[object, Listener[T]] = {}
        self._generation = 0
        self._logger: LoggerPort = logger if logger is not None else StdlibLogger()

    # State ------------------------------------------------------------------

    @property
    def state(self) -> AsyncOutcome[T]:
        return self._state

    @state.setter
    def state(self, outcome: AsyncOutcome[T]) -> None:
        self._check(outcome)
        previous = self._state
        if outcome is previous:
            return
        self._state = outcome
        if self._logger.is_enabled_for("debug"):
            self._logger.debug(
                "outcome.transition",
                previous=to_serializable(previous),
                current=to_serializable(outcome),
            )
        if isinstance(outcome, Failed):
            self._logger.warning("outcome.failed", error=repr(outcome.error))
        for listener in list(self._listeners.values()):
            listener(outcome)

    def listen(
        self, listener: Listener[T], *, fire_immediately: bool = True
    ) -> Callable[[], None]:
        """
        Subscribe to state changes. Returns a function removing the subscription;
        calling it more than once is harmless.

        If the immediate call raises, the listener is not subscribed.
        """
        if fire_immediately:
            listener(self._state)

        token = object()
        self._listeners[token] = listener

        def remove() -> None:
            self._listeners.pop(token, None)

        return remove

    # Async work -------------------------------------------------------------

    async def load(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        canceller: Optional[Canceller] = None,
    ) -> AsyncOutcome[T]:
        self._generation += 1
        generation = self._generation
        self.state = Loading(0.0, canceller=canceller)
        outcome = await AsyncOutcome.guard(operation)
        if generation != self._generation:
            self._logger.debug("outcome.superseded", generation=generation)
            return outcome
        self.state = outcome
        return outcome

    def report_progress(self, progress: float) -> bool:
        """
        Republish the current Loading state with a new progress, keeping its
        canceller. Returns False when not loading.
        """
        current = self._state
        if not isinstance(current, Loading):
            return False
        self.state = Loading(progress, canceller=current.canceller)
        return True

    def cancel(self) -> bool:
        canceller = self._state.map_or_none(on_loading=lambda lo: lo.canceller)
        if canceller is None:
            if self._logger.is_enabled_for("debug"):
                self._logger.debug(
                    "outcome.cancel_unavailable", state=to_serializable(self._state)
                )
            return False
        self._logger.info("outcome.cancel_requested")
        canceller()
        return True

    # Internal ---------------------------------------------------------------

    @staticmethod
    def _check(outcome: object) -> None:
        if not isinstance(outcome, AsyncOutcome):
            raise InvalidState(details={"state": repr(outcome)})

"""
Pytest fixtures for the async_outcome TestKit.

Usage:
    # conftest.py or tests using direct import
    from async_outcome.testkit.fixtures import (
        capturing_logger,
        counting_canceller,
        outcome_holder,
        recording_listener,
    )

    def test_example(outcome_holder, recording_listener, counting_canceller):
        outcome_holder.listen(recording_listener)
        outcome_holder.state = Loading(0.5, canceller=counting_canceller)

        assert outcome_holder.cancel()
        assert counting_canceller.calls == 1
        assert recording_listener.last == Loading(0.5)

Fixtures:
- capturing_logger: CapturingLogger
- recording_listener: RecordingListener
- counting_canceller: CountingCanceller
- outcome_holder: OutcomeHolder wired to capturing_logger, starting at Loading(0.0)
"""

from __future__ import annotations

from typing import Any

import pytest

from async_outcome.holder import OutcomeHolder
from async_outcome.testkit import (
    CapturingLogger,
    CountingCanceller,
    RecordingListener,
)


@pytest.fixture
def capturing_logger() -> CapturingLogger:
    """Logger that records log entries for assertions."""
    return CapturingLogger()


@pytest.fixture
def recording_listener() -> RecordingListener[Any]:
    """Listener that records every published outcome."""
    return RecordingListener()


@pytest.fixture
def counting_canceller() -> CountingCanceller:
    """Canceller that counts cancellation requests."""
    return CountingCanceller()


@pytest.fixture
def outcome_holder(capturing_logger: CapturingLogger) -> OutcomeHolder[Any]:
    """Holder pre-wired with the capturing logger."""
    return OutcomeHolder(logger=capturing_logger)


__all__ = [
    "capturing_logger",
    "recording_listener",
    "counting_canceller",
    "outcome_holder",
]

from __future__ import annotations

from async_outcome.testkit.fixtures import (  # noqa: F401
    capturing_logger,
    counting_canceller,
    outcome_holder,
    recording_listener,
)

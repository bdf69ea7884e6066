from __future__ import annotations

from async_outcome.outcome import Loaded, Loading
from async_outcome.ports import LoggerPort
from async_outcome.testkit import CapturingLogger, CountingCanceller, RecordingListener


def test_recording_listener_captures_outcomes():
    listener: RecordingListener[int] = RecordingListener()
    listener(Loading(0.5))
    listener(Loaded(1))
    assert list(listener.outcomes) == [Loading(0.5), Loaded(1)]
    assert listener.last == Loaded(1)
    listener.clear()
    assert list(listener.outcomes) == []
    assert listener.last is None


def test_counting_canceller_counts_calls():
    stop = CountingCanceller()
    assert not stop.called
    stop()
    stop()
    assert stop.calls == 2
    assert stop.called


def test_capturing_logger_records_levels():
    logger = CapturingLogger()
    assert isinstance(logger, LoggerPort)
    logger.debug("d", x=1)
    logger.info("i", k="v")
    logger.warning("w")
    logger.error("e", err="boom")

    levels = [r["level"] for r in logger.records]
    msgs = [r["msg"] for r in logger.records]
    assert levels == ["debug", "info", "warning", "error"]
    assert msgs == ["d", "i", "w", "e"]
    assert logger.records[-1]["err"] == "boom"
    assert logger.messages("info") == ["i"]
    assert logger.messages() == msgs


def test_fixtures_are_wired(outcome_holder, capturing_logger, recording_listener):
    outcome_holder.listen(recording_listener)
    outcome_holder.state = Loaded("ok")
    assert recording_listener.last == Loaded("ok")
    assert capturing_logger.messages("debug") == ["outcome.transition"]


def test_capturing_logger_level_threshold():
    logger = CapturingLogger(level="warning")
    assert not logger.is_enabled_for("debug")
    assert not logger.is_enabled_for("info")
    assert logger.is_enabled_for("warning")
    assert logger.is_enabled_for("error")
    logger.info("dropped")
    logger.error("kept")
    assert logger.messages() == ["kept"]

from __future__ import annotations

import logging

from async_outcome.ports import LoggerPort, StdlibLogger


def test_stdlib_logger_is_a_logger_port():
    assert isinstance(StdlibLogger(), LoggerPort)
    assert StdlibLogger().name == "async_outcome"
    assert StdlibLogger("app.outcomes").name == "app.outcomes"


def test_stdlib_logger_renders_fields(caplog):
    caplog.set_level(logging.DEBUG, logger="async_outcome")
    logger = StdlibLogger()
    logger.info("outcome.cancel_requested")
    logger.warning("outcome.failed", error="ValueError('x')")

    first, second = caplog.records
    assert first.levelno == logging.INFO
    assert first.getMessage() == "outcome.cancel_requested"
    assert second.levelno == logging.WARNING
    assert second.getMessage() == "outcome.failed error=\"ValueError('x')\""
    assert second.fields == {"error": "ValueError('x')"}


def test_stdlib_logger_skips_disabled_levels(caplog):
    caplog.set_level(logging.WARNING, logger="async_outcome")
    logger = StdlibLogger()
    logger.debug("hidden", x=1)
    logger.error("shown")
    assert [r.getMessage() for r in caplog.records] == ["shown"]


def test_stdlib_logger_reports_enabled_levels():
    logging.getLogger("async_outcome.levels").setLevel(logging.INFO)
    logger = StdlibLogger("async_outcome.levels")
    assert not logger.is_enabled_for("debug")
    assert logger.is_enabled_for("info")
    assert logger.is_enabled_for("error")

"""JSON console logging tests."""

from __future__ import annotations

import json
import logging

from weather_lookup.log_setup import JsonConsoleFormatter, setup_logger


def _record(msg: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="weather_lookup",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_lifts_search_context() -> None:
    output = JsonConsoleFormatter().format(
        _record("Weather search for Zürich failed", city="Zürich", request_id=3, status_code=404)
    )
    event = json.loads(output)

    assert event["message"] == "Weather search for Zürich failed"
    assert event["city"] == "Zürich"
    assert event["request_id"] == 3
    assert event["status_code"] == 404
    assert "error_kind" not in event
    assert "Zürich" in output


def test_setup_logger_applies_configured_level_without_duplicate_handlers() -> None:
    name = "test.weather_lookup.setup"
    logger = setup_logger("DEBUG", name=name)
    assert logger.level == logging.DEBUG
    assert not logger.propagate

    again = setup_logger("WARNING", name=name)
    assert again is logger
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1

from __future__ import annotations

import json
import logging
import sys

from englitune.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_LIMIT = 10
EXPECTED_SPEAKERS = 2


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.limit = EXPECTED_LIMIT
    record.excluded_speakers = EXPECTED_SPEAKERS

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["limit"] == EXPECTED_LIMIT
    assert payload["excluded_speakers"] == EXPECTED_SPEAKERS
    assert "pathname" not in payload


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise RuntimeError("store down")
    except RuntimeError:
        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: store down" in payload["exc_info"]


def test_configure_logging_json_installs_json_formatter() -> None:
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        configure_logging(level="DEBUG", json_logs=True)

        assert root.level == logging.DEBUG
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])


def test_configure_logging_without_force_keeps_existing_handlers() -> None:
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    sentinel = logging.NullHandler()
    root.handlers[:] = [sentinel]
    try:
        configure_logging(level="DEBUG", force=False)

        assert root.handlers == [sentinel]
    finally:
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])

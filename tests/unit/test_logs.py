"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging

from labs.logs import JsonFormatter, configure_logging, get_logger


def test_json_formatter_renders_record() -> None:
    record = logging.LogRecord("labs.test", logging.INFO, __file__, 1, "Producto %s", ("creado",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "labs.test"
    assert payload["message"] == "Producto creado"


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, list(root.handlers)
    try:
        configure_logging("debug", json_logs=True)
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)


def test_get_logger_returns_named_logger() -> None:
    assert get_logger("labs.eventos").name == "labs.eventos"

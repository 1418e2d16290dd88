"""Tests for logging configuration."""

import json
import logging
import sys

import pytest

from src.config.logging_config import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_format(self):
        record = logging.LogRecord("src.features.auth", logging.INFO, __file__, 1, "User logged in: id=%s", (3,), None)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "src.features.auth"
        assert entry["message"] == "User logged in: id=3"
        assert "timestamp" in entry

    def test_format_with_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        entry = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad" in entry["exception"]


class TestConfigureLogging:
    def test_sets_level(self, restore_root_logger):
        configure_logging("debug", "text")
        assert restore_root_logger.level == logging.DEBUG

    def test_repeated_calls_do_not_stack_handlers(self, restore_root_logger):
        configure_logging("INFO", "json")
        configure_logging("INFO", "json")

        app_handlers = [h for h in restore_root_logger.handlers if getattr(h, "_app_handler", False)]
        assert len(app_handlers) == 1
        assert isinstance(app_handlers[0].formatter, JsonFormatter)

    def test_text_format(self, restore_root_logger):
        configure_logging("INFO", "text")

        app_handlers = [h for h in restore_root_logger.handlers if getattr(h, "_app_handler", False)]
        assert not isinstance(app_handlers[0].formatter, JsonFormatter)

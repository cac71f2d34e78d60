"""
Unit tests for logging setup.
"""

import logging

import pytest

from clausetree.logging_config import ColoredFormatter, LogColors, resolve_level, setup_logging
from clausetree.settings import Settings


@pytest.fixture
def clean_logging(monkeypatch):
    """Leave the clausetree logger as it was found."""
    monkeypatch.delenv("CLAUSETREE_DEV_MODE", raising=False)
    logger = logging.getLogger("clausetree")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


class TestResolveLevel:
    """Tests for resolve_level."""

    def test_names_and_ints(self, clean_logging):
        assert resolve_level("ERROR") == logging.ERROR
        assert resolve_level(" warning ") == logging.WARNING
        assert resolve_level(logging.DEBUG) == logging.DEBUG
        assert resolve_level(None) == logging.INFO

    def test_unknown_name_rejected(self, clean_logging):
        with pytest.raises(ValueError):
            resolve_level("LOUD")

    def test_dev_mode_forces_debug(self, clean_logging, monkeypatch):
        monkeypatch.setenv("CLAUSETREE_DEV_MODE", "1")
        assert resolve_level("ERROR") == logging.DEBUG


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_log_level_setting_reaches_logger(self, clean_logging, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        settings = Settings(_env_file=None)

        setup_logging(level=settings.log_level, use_colors=False)

        assert clean_logging.level == logging.ERROR
        assert [h.level for h in clean_logging.handlers] == [logging.ERROR]

    def test_repeated_setup_keeps_one_console_handler(self, clean_logging):
        setup_logging(level="INFO", use_colors=False)
        setup_logging(level="INFO", use_colors=False)
        assert len(clean_logging.handlers) == 1


class TestColoredFormatter:
    """Tests for message coloring."""

    def test_diagnostic_lines_get_their_own_color(self):
        formatter = ColoredFormatter("%(message)s")
        assert formatter.message_color("[DUPLICATE_CLAIM] Word at index 2") == LogColors.DIAGNOSTIC
        assert formatter.message_color("❌ Syntax analysis FAILED for John 3:16") == LogColors.FAILED
        assert formatter.message_color("✅ Coverage passed: 2 clauses") == LogColors.PASSED
        assert formatter.message_color("DONE: Syntax analysis (0.010s)") == LogColors.TIMING
        assert formatter.message_color("Built 2 clauses") is None

    def test_record_is_restored_after_formatting(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        formatter.use_colors = True
        record = logging.LogRecord("clausetree.test", logging.WARNING, __file__, 1, "[%s] x", ("EMPTY_CLAUSE",), None)

        formatted = formatter.format(record)

        assert LogColors.DIAGNOSTIC in formatted
        assert record.levelname == "WARNING"
        assert record.msg == "[%s] x"
        assert record.args == ("EMPTY_CLAUSE",)

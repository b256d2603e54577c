"""Unit tests for logging setup."""

import logging

import pytest

from xui.config import LogLevel
from xui.logging_setup import setup_logging, to_logging_level


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep root logger changes local to each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestToLoggingLevel:
    """Tests for level mapping."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (LogLevel.DEBUG, logging.DEBUG),
            (LogLevel.INFO, logging.INFO),
            (LogLevel.NOTICE, logging.INFO),
            (LogLevel.WARNING, logging.WARNING),
            (LogLevel.ERROR, logging.ERROR),
            ("WARNING", logging.WARNING),
        ],
    )
    def test_known_levels(self, level: LogLevel | str, expected: int) -> None:
        assert to_logging_level(level) == expected

    def test_unknown_level(self) -> None:
        assert to_logging_level("verbose") is None


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_applies_level(self) -> None:
        assert setup_logging("error") == logging.ERROR
        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert setup_logging("verbose") == logging.INFO
        assert logging.getLogger().level == logging.INFO

"""Tests for logger.py - package logger configuration."""

from __future__ import annotations

import logging

import pytest

from xray_exporter.core.logger import PACKAGE_LOGGER_NAME, configure_logger, get_log_level, set_log_level

pytestmark = pytest.mark.usefixtures("restore_package_logger")


class TestConfigureLogger:
    """Tests for configure_logger function."""

    def test_sets_level_and_handler(self):
        configure_logger(log_level="debug")

        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False
        assert get_log_level() == "debug"

    def test_reconfigure_replaces_handler(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        before = len(package_logger.handlers)

        configure_logger()
        configure_logger(prefix="Other")

        assert len(package_logger.handlers) == before + 1

    def test_prefix_in_output(self, capsys):
        configure_logger(log_level="info", prefix="TestPrefix")

        logging.getLogger(f"{PACKAGE_LOGGER_NAME}.core").info("hello")

        assert "[TestPrefix] INFO xray_exporter.core: hello" in capsys.readouterr().err


class TestSetLogLevel:
    """Tests for set_log_level function."""

    def test_silent_suppresses_errors(self):
        set_log_level("silent")

        assert not logging.getLogger(PACKAGE_LOGGER_NAME).isEnabledFor(logging.CRITICAL)

    def test_warn(self):
        set_log_level("warn")

        assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.WARNING
        assert get_log_level() == "warn"

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            set_log_level("verbose")

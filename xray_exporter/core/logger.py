"""Logging configuration for the X-Ray exporter.

All modules log through ``logging.getLogger(__name__)``; this module only
configures the package logger that those loggers propagate to.
"""

from __future__ import annotations

import logging
from typing import Literal

LogLevel = Literal["silent", "error", "warn", "info", "debug"]

PACKAGE_LOGGER_NAME = "xray_exporter"

_LEVELS: dict[str, int] = {
    "silent": logging.CRITICAL + 1,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_current_level: LogLevel = "info"
_handler: logging.Handler | None = None


def configure_logger(log_level: LogLevel = "info", prefix: str = "XRayExporter") -> None:
    """
    Configure the package logger.

    Args:
        log_level: One of silent, error, warn, info, debug
        prefix: Tag printed in front of every record
    """
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(f"[{prefix}] %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(_handler)
    package_logger.propagate = False

    set_log_level(log_level)


def set_log_level(log_level: LogLevel) -> None:
    global _current_level

    if log_level not in _LEVELS:
        raise ValueError(f"Invalid log level: {log_level}")
    _current_level = log_level
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(_LEVELS[log_level])


def get_log_level() -> LogLevel:
    return _current_level

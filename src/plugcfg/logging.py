"""Logging setup for the plugin configuration language server."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAMESPACE = "plugcfg"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handler(log_file: Path | None) -> logging.Handler:
    if log_file is not None:
        return logging.FileHandler(log_file)
    # stdout carries the LSP stream in stdio mode
    return logging.StreamHandler(sys.stderr)


def configure_logging(
    *,
    level: str = "INFO",
    log_file: Path | None = None,
    framework_level: str = "WARNING",
) -> None:
    """
    Configure the ``plugcfg`` logger namespace.

    Args:
        level: Log level for plugcfg loggers (DEBUG, INFO, WARNING, ...).
        log_file: Write to this file instead of stderr when given.
        framework_level: Log level for the pygls framework logger, which is
            chatty at DEBUG and shares the same handler.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    pygls_level = getattr(logging, framework_level.upper(), logging.WARNING)

    handler = _build_handler(log_file)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(min(log_level, pygls_level))

    for name, name_level in ((LOGGER_NAMESPACE, log_level), ("pygls", pygls_level)):
        logger = logging.getLogger(name)
        logger.setLevel(name_level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``plugcfg.<name>`` logger."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")

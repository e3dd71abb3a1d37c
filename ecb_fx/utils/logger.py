"""Logging helpers shared by the ecb_fx modules and CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PACKAGE_LOGGER = "ecb_fx"

_CONFIGURED = False


def configure_logging(level: int | None = None) -> None:
    """Install the package log format once and optionally adjust the level."""
    global _CONFIGURED
    if not _CONFIGURED:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        _CONFIGURED = True
    if level is not None:
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return a logger under the package namespace, configuring output on first use."""
    configure_logging()
    return logging.getLogger(name)

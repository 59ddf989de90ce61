"""Logging setup and the error sink used by request handlers."""

from __future__ import annotations

import logging

logger = logging.getLogger("panel_gateway")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the package logger once."""

    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)


def log_error(message: str, error: BaseException | None = None) -> None:
    """Record a failure along with its traceback."""

    if error is None:
        logger.error(message)
        return
    logger.error(
        "%s: %s",
        message,
        error,
        exc_info=(type(error), error, error.__traceback__),
    )


__all__ = ["configure_logging", "log_error", "logger"]

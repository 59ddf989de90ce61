"""Core configuration and infrastructure helpers."""

from .config import DEFAULT_PASSWORD_LENGTH, DEFAULT_RETURN_TO, Settings, load_settings
from .database import create_tables, make_engine
from .logs import configure_logging, log_error
from .time import utcnow

__all__ = [
    "DEFAULT_PASSWORD_LENGTH",
    "DEFAULT_RETURN_TO",
    "Settings",
    "configure_logging",
    "create_tables",
    "load_settings",
    "log_error",
    "make_engine",
    "utcnow",
]

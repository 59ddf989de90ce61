"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_PASSWORD_LENGTH = 12
DEFAULT_RETURN_TO = "/dashboard"


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the gateway and its collaborators."""

    discord_client_id: str
    discord_client_secret: str
    discord_callback_url: str
    panel_url: str
    panel_key: str
    secret_key: str
    password_length: int = DEFAULT_PASSWORD_LENGTH
    panel_timeout: float = 20.0
    frontend_origins: List[str] = field(default_factory=list)
    allowed_cors_origins: List[str] = field(default_factory=list)
    cookie_domain: Optional[str] = None
    cookie_secure: bool = False
    cookie_samesite: str = "lax"
    database_url: str = "sqlite:///data/app.db"
    log_level: str = "INFO"
    default_return_to: str = DEFAULT_RETURN_TO
    login_path: str = "/login"
    home_path: str = "/"

    def __post_init__(self) -> None:
        object.__setattr__(self, "panel_url", _strip_trailing_slash(self.panel_url))

    def login_error_url(self, code: str) -> str:
        return f"{self.login_path}?error={code}"


_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Build settings from the process environment (and ``.env``)."""

    # FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
    frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
    additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

    try:
        panel_timeout = float(os.getenv("PANEL_TIMEOUT", "20"))
    except ValueError as exc:
        raise RuntimeError("PANEL_TIMEOUT must be a number") from exc

    return Settings(
        discord_client_id=_require_env("DISCORD_CLIENT_ID"),
        discord_client_secret=_require_env("DISCORD_CLIENT_SECRET"),
        discord_callback_url=_require_env("DISCORD_CALLBACK_URL"),
        panel_url=_require_env("PANEL_URL"),
        panel_key=_require_env("PANEL_KEY"),
        secret_key=_require_env("SECRET_KEY"),
        password_length=_env_positive_int("PASSWORD_LENGTH", DEFAULT_PASSWORD_LENGTH),
        panel_timeout=panel_timeout,
        frontend_origins=frontend_origins,
        allowed_cors_origins=_unique(
            [*frontend_origins, *additional_origins, *_local_dev_origins]
        ),
        cookie_domain=os.getenv("COOKIE_DOMAIN") or None,
        cookie_secure=_env_bool("COOKIE_SECURE", False),
        cookie_samesite=os.getenv("COOKIE_SAMESITE", "lax"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///data/app.db"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


__all__ = [
    "DEFAULT_PASSWORD_LENGTH",
    "DEFAULT_RETURN_TO",
    "Settings",
    "load_settings",
]

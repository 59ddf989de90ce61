"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import Settings, configure_logging, create_tables, load_settings, make_engine
from .services import (
    AccountReconciler,
    AuthGateway,
    DiscordProvider,
    IdentityProvider,
    KeyValueStore,
    PanelClient,
    SQLModelStore,
)


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[KeyValueStore] = None,
    provider: Optional[IdentityProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    engine = None
    if store is None:
        engine = make_engine(settings.database_url)
        store = SQLModelStore(engine)

    owns_client = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.panel_timeout)

    if provider is None:
        provider = DiscordProvider(
            settings.discord_client_id,
            settings.discord_client_secret,
            settings.discord_callback_url,
        )

    panel = PanelClient(settings.panel_url, settings.panel_key, http_client)
    reconciler = AccountReconciler(
        store, panel, password_length=settings.password_length
    )
    gateway = AuthGateway(settings, store, reconciler, provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            create_tables(engine)
        yield
        if owns_client:
            await http_client.aclose()

    app = FastAPI(title="Panel Gateway", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie="sid",
        https_only=settings.cookie_secure,
        same_site=settings.cookie_samesite,
        domain=settings.cookie_domain,
    )

    register_routes(app)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("panel_gateway.app:create_app", factory=True, host="127.0.0.1", port=3000, reload=True)

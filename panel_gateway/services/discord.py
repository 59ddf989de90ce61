"""Discord OAuth client built on Authlib's Starlette integration."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request
from starlette.responses import Response

from ..errors import ProviderAuthFailure

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://discord.com/api/oauth2/authorize"
TOKEN_URL = "https://discord.com/api/oauth2/token"
API_BASE = "https://discord.com/api/"
SCOPES = "identify email"


class DiscordProvider:
    """Redirects to Discord and turns its callback into a profile dict."""

    def __init__(self, client_id: str, client_secret: str, callback_url: str) -> None:
        self.callback_url = callback_url
        self._oauth = OAuth()
        self._oauth.register(
            name="discord",
            client_id=client_id,
            client_secret=client_secret,
            authorize_url=AUTHORIZE_URL,
            access_token_url=TOKEN_URL,
            api_base_url=API_BASE,
            client_kwargs={"scope": SCOPES},
        )

    @property
    def client(self):
        return self._oauth.discord

    async def authorize_redirect(self, request: Request) -> Response:
        return await self.client.authorize_redirect(request, self.callback_url)

    async def fetch_profile(self, request: Request) -> Dict[str, Any]:
        error = request.query_params.get("error")
        if error:
            raise ProviderAuthFailure(f"Discord returned error: {error}")
        try:
            token = await self.client.authorize_access_token(request)
            r = await self.client.get("users/@me", token=token)
            r.raise_for_status()
        except (OAuthError, httpx.HTTPError) as exc:
            logger.warning("Discord authorization failed: %s", exc)
            raise ProviderAuthFailure(str(exc)) from exc
        return r.json()


__all__ = ["API_BASE", "AUTHORIZE_URL", "DiscordProvider", "SCOPES", "TOKEN_URL"]

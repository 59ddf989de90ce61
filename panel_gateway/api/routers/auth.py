"""Discord login, callback and logout routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ...core.logs import log_error
from ...errors import (
    ACCOUNT_SETUP_FAILED,
    DISCORD_AUTH_FAILED,
    Err,
    ProviderAuthFailure,
)
from ...services import AuthGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def get_gateway(request: Request) -> AuthGateway:
    return request.app.state.gateway


def _fail(gateway: AuthGateway, code: str) -> RedirectResponse:
    return RedirectResponse(gateway.settings.login_error_url(code), status_code=302)


@router.get("/login/discord")
async def login_discord(
    request: Request,
    returnTo: Optional[str] = None,
    gateway: AuthGateway = Depends(get_gateway),
):
    request.session["returnTo"] = gateway.safe_return_to(returnTo)
    return await gateway.provider.authorize_redirect(request)


@router.get("/callback/discord")
async def callback_discord(
    request: Request, gateway: AuthGateway = Depends(get_gateway)
):
    try:
        profile = await gateway.provider.fetch_profile(request)
    except ProviderAuthFailure:
        request.session.pop("uid", None)
        return _fail(gateway, DISCORD_AUTH_FAILED)

    result = gateway.verify_assertion(profile)
    if isinstance(result, Err):
        request.session.pop("uid", None)
        log_error(
            f"Auth callback failed: no email from Discord for user {result.error.external_id}"
        )
        return _fail(gateway, ACCOUNT_SETUP_FAILED)

    identity = result.value
    try:
        await gateway.provision(identity)
    except Exception as exc:
        request.session.pop("uid", None)
        log_error("Auth callback failed", exc)
        return _fail(gateway, ACCOUNT_SETUP_FAILED)

    request.session["uid"] = gateway.to_session_token(identity)
    next_url = request.session.pop("returnTo", None) or gateway.settings.default_return_to
    logger.info("User %s signed in", identity.external_id)
    return RedirectResponse(next_url, status_code=302)


@router.get("/logout")
async def logout(request: Request, gateway: AuthGateway = Depends(get_gateway)):
    request.session.clear()
    return RedirectResponse(gateway.settings.home_path, status_code=302)


@router.get("/me")
async def me(request: Request, gateway: AuthGateway = Depends(get_gateway)):
    user = await gateway.from_session_token(request.session.get("uid"))
    if user is None:
        request.session.pop("uid", None)
        return JSONResponse({"user": None})
    return JSONResponse({"user": user.model_dump()})


__all__ = ["get_gateway", "router"]

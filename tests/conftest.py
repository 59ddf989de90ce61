"""Shared fixtures: in-memory store, fake Discord provider, mocked panel API."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from panel_gateway.app import create_app
from panel_gateway.core import Settings
from panel_gateway.errors import ProviderAuthFailure

PANEL_URL = "https://panel.example.test"


class MemoryStore:
    """Dict-backed stand-in for the key-value store."""

    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}
        self.fail_get = False
        self.fail_set_prefix: Optional[str] = None

    async def get(self, key: str) -> Optional[Any]:
        if self.fail_get:
            raise RuntimeError("store unavailable")
        return self.data.get(key)

    async def set(self, key: str, value: Any) -> None:
        if self.fail_set_prefix is not None and key.startswith(self.fail_set_prefix):
            raise RuntimeError("store write failed")
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FakeDiscord:
    """Identity provider double; the callback returns whatever profile is set."""

    def __init__(self) -> None:
        self.profile: Dict[str, Any] = {
            "id": "1001",
            "username": "alice",
            "email": "a@x.com",
            "avatar": "abc123",
        }
        self.fail = False
        self.redirects = 0

    async def authorize_redirect(self, request: Request) -> Response:
        self.redirects += 1
        return RedirectResponse(
            "https://discord.com/api/oauth2/authorize?scope=identify+email",
            status_code=302,
        )

    async def fetch_profile(self, request: Request) -> Dict[str, Any]:
        if self.fail:
            raise ProviderAuthFailure("access_denied")
        return dict(self.profile)


class FakePanel:
    """Records create-user calls and answers from a per-email script."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.headers: List[httpx.Headers] = []
        self.responses: Dict[str, httpx.Response] = {}
        self.next_id = 42

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append(body)
        self.headers.append(request.headers)
        scripted = self.responses.get(body["email"])
        if scripted is not None:
            return scripted
        user_id = str(self.next_id)
        self.next_id += 1
        return httpx.Response(200, json={"userId": user_id})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        discord_client_id="client-id",
        discord_client_secret="client-secret",
        discord_callback_url="http://testserver/callback/discord",
        panel_url=PANEL_URL + "/",
        panel_key="panel-key",
        secret_key="test-secret-key-for-testing-purposes-only",
        frontend_origins=["https://panel-ui.example.test"],
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def discord() -> FakeDiscord:
    return FakeDiscord()


@pytest.fixture
def panel() -> FakePanel:
    return FakePanel()


@pytest.fixture
def app(settings, store, discord, panel):
    return create_app(settings, store=store, provider=discord, http_client=panel.client())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

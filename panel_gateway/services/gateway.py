"""Login gateway tying Discord identities to panel accounts."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Union
from urllib.parse import urlsplit

from starlette.requests import Request
from starlette.responses import Response

from ..core.config import Settings
from ..errors import Err, MissingEmail, Ok, Result
from ..models import Identity, UserRecord
from .accounts import AccountReconciler
from .store import KeyValueStore, user_key


class IdentityProvider(Protocol):
    async def authorize_redirect(self, request: Request) -> Response: ...

    async def fetch_profile(self, request: Request) -> Dict[str, Any]: ...


class AuthGateway:
    """Validates Discord assertions and maps them onto local sessions."""

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore,
        reconciler: AccountReconciler,
        provider: IdentityProvider,
    ) -> None:
        self.settings = settings
        self.store = store
        self.reconciler = reconciler
        self.provider = provider

    def verify_assertion(self, profile: Dict[str, Any]) -> Result[Identity, MissingEmail]:
        identity = Identity.from_profile(profile)
        if not identity.email:
            return Err(MissingEmail(external_id=identity.external_id))
        return Ok(identity)

    async def provision(self, identity: Identity) -> str:
        """Return the backing account id for a verified identity."""

        return await self.reconciler.ensure_backing_account(
            identity.email or "", identity.username, identity.external_id
        )

    @staticmethod
    def to_session_token(user: Union[Identity, UserRecord]) -> str:
        return user.external_id

    async def from_session_token(self, token: Optional[str]) -> Optional[UserRecord]:
        if not token:
            return None
        data = await self.store.get(user_key(str(token)))
        if not data:
            return None
        return UserRecord.model_validate(data)

    def safe_return_to(self, raw: Optional[str]) -> str:
        """Accept local paths or URLs on a configured frontend origin."""

        default = self.settings.default_return_to
        if not raw:
            return default
        if raw.startswith("/") and not raw.startswith("//") and "\\" not in raw:
            return raw
        parts = urlsplit(raw)
        if parts.scheme in ("http", "https") and parts.netloc:
            origin = f"{parts.scheme}://{parts.netloc}"
            allowed = {o.rstrip("/") for o in self.settings.frontend_origins}
            if origin in allowed:
                return raw
        return default


__all__ = ["AuthGateway", "IdentityProvider"]

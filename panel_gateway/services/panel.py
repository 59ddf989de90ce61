"""Client for the panel's account-provisioning API."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from ..errors import PanelConflict, ProvisioningError

logger = logging.getLogger(__name__)

CREATE_USER_PATH = "/api/auth/create-user"


def _user_id_from(payload: Any) -> str:
    user_id = payload.get("userId") if isinstance(payload, dict) else None
    if user_id is None or user_id == "":
        raise ProvisioningError("Panel response did not include a userId")
    return str(user_id)


class PanelClient:
    """Thin wrapper over ``httpx.AsyncClient`` for panel account calls."""

    def __init__(self, base_url: str, api_key: str, client: httpx.AsyncClient) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client

    async def create_user(
        self,
        *,
        username: str,
        email: str,
        password: str,
        user_id: str,
    ) -> str:
        """Create a panel account and return its id.

        Raises ``PanelConflict`` carrying the existing account id when the
        panel answers 409, and ``httpx.HTTPStatusError`` for other error
        statuses.
        """

        body: Dict[str, Any] = {
            "username": username,
            "email": email,
            "password": password,
            "userId": user_id,
        }
        r = await self._client.post(
            f"{self.base_url}{CREATE_USER_PATH}",
            json=body,
            headers={"x-api-key": self._api_key, "Content-Type": "application/json"},
        )
        if r.status_code == 409:
            existing = _user_id_from(r.json())
            logger.info("Panel account for %s already exists as %s", email, existing)
            raise PanelConflict(existing)
        r.raise_for_status()
        return _user_id_from(r.json())


__all__ = ["CREATE_USER_PATH", "PanelClient"]

"""Identity types exchanged between the provider, the store and sessions."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlmodel import SQLModel


class Identity(SQLModel):
    """Profile asserted by Discord during a single callback."""

    external_id: str
    username: str
    email: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "Identity":
        return cls(
            external_id=str(profile["id"]),
            username=profile.get("username") or "",
            email=profile.get("email") or None,
            avatar=profile.get("avatar"),
        )


class UserRecord(SQLModel):
    """Local user persisted under ``user-<external_id>``."""

    external_id: str
    email: str
    username: str
    backing_account_id: str


__all__ = ["Identity", "UserRecord"]

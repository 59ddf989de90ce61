"""Panel account reconciliation.

Every Discord login resolves to exactly one panel account per email address.
The email index is checked first, so repeat logins never reach the panel. On
an index miss a new account is created. If the panel reports that the email
is already taken, its existing id is adopted and the index is repaired.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
import weakref
from typing import Any, Callable, Optional

from ..core.config import DEFAULT_PASSWORD_LENGTH
from ..errors import PanelConflict
from ..models import UserRecord
from .panel import PanelClient
from .store import KeyValueStore, email_key, user_key

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """Return a random alphanumeric credential for account creation."""

    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AccountReconciler:
    """Ensures a panel account id is known locally for an email."""

    def __init__(
        self,
        store: KeyValueStore,
        panel: PanelClient,
        *,
        password_length: int = DEFAULT_PASSWORD_LENGTH,
        password_factory: Optional[Callable[[int], str]] = None,
    ) -> None:
        self.store = store
        self.panel = panel
        self.password_length = password_length
        self._password_factory = password_factory or generate_password
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, email: str) -> asyncio.Lock:
        lock = self._locks.get(email)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[email] = lock
        return lock

    async def ensure_backing_account(
        self, email: str, username: str, external_id: str
    ) -> str:
        index_key = email_key(normalize_email(email))
        async with self._lock_for(index_key):
            existing = await self.store.get(index_key)
            if existing:
                account_id = str(existing)
                await self._sync_user_record(external_id, email, username, account_id)
                return account_id

            password = self._password_factory(self.password_length)
            try:
                account_id = await self.panel.create_user(
                    username=username,
                    email=email,
                    password=password,
                    user_id=external_id,
                )
            except PanelConflict as conflict:
                account_id = conflict.user_id
                logger.info("Adopting existing panel account %s for %s", account_id, email)
            else:
                logger.info("Created panel account %s for %s", account_id, email)

            # Record first: the index entry gates the fast path above.
            previous = await self._sync_user_record(
                external_id, email, username, account_id
            )
            try:
                await self.store.set(index_key, account_id)
            except Exception:
                await self._restore_user_record(external_id, previous)
                raise
            return account_id

    async def _sync_user_record(
        self, external_id: str, email: str, username: str, account_id: str
    ) -> Optional[Any]:
        """Upsert the user record and return the value it replaced."""

        record = UserRecord(
            external_id=external_id,
            email=email,
            username=username,
            backing_account_id=account_id,
        ).model_dump()
        current = await self.store.get(user_key(external_id))
        if current != record:
            await self.store.set(user_key(external_id), record)
        return current

    async def _restore_user_record(self, external_id: str, previous: Optional[Any]) -> None:
        key = user_key(external_id)
        if previous is None:
            await self.store.delete(key)
        else:
            await self.store.set(key, previous)


__all__ = [
    "AccountReconciler",
    "PASSWORD_ALPHABET",
    "generate_password",
    "normalize_email",
]

"""Key-value persistence for user records and the email index."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ..core.time import utcnow
from ..models import KeyValueEntry


def user_key(external_id: str) -> str:
    return f"user-{external_id}"


def email_key(email: str) -> str:
    return f"id-{email}"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...


class SQLModelStore:
    """Stores JSON-encoded values in the ``kv_entry`` table.

    Session work runs in a worker thread so SQLite I/O never blocks the loop.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set, key, json.dumps(value))

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)

    def _get(self, key: str) -> Optional[Any]:
        with Session(self._engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                return None
            return json.loads(entry.value)

    def _set(self, key: str, encoded: str) -> None:
        with Session(self._engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                entry = KeyValueEntry(key=key, value=encoded)
            else:
                entry.value = encoded
                entry.updated_at = utcnow()
            session.add(entry)
            session.commit()

    def _delete(self, key: str) -> None:
        with Session(self._engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()


__all__ = ["KeyValueStore", "SQLModelStore", "email_key", "user_key"]

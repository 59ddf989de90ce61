"""Database model backing the key-value store."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class KeyValueEntry(SQLModel, table=True):
    """JSON value stored under a string key."""

    __tablename__ = "kv_entry"

    key: str = ORMField(primary_key=True)
    value: str
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["KeyValueEntry"]

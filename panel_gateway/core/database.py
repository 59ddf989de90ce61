"""Database configuration helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine


def make_engine(database_url: str) -> Engine:
    """Create an engine, preparing the data directory for file-backed SQLite."""

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        db_path = database_url.split("sqlite:///", 1)[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args=connect_args)


def create_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


__all__ = ["create_tables", "make_engine"]

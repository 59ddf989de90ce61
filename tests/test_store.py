from __future__ import annotations

import threading

import pytest

from panel_gateway.core import create_tables, make_engine
from panel_gateway.services import SQLModelStore


@pytest.fixture
def sql_store(tmp_path) -> SQLModelStore:
    engine = make_engine(f"sqlite:///{tmp_path / 'data' / 'app.db'}")
    create_tables(engine)
    return SQLModelStore(engine)


@pytest.mark.asyncio
async def test_get_missing_key(sql_store) -> None:
    assert await sql_store.get("id-nobody@x.com") is None


@pytest.mark.asyncio
async def test_set_and_overwrite(sql_store) -> None:
    await sql_store.set("id-a@x.com", "42")
    await sql_store.set("user-1001", {"external_id": "1001", "backing_account_id": "42"})
    await sql_store.set("id-a@x.com", "43")

    assert await sql_store.get("id-a@x.com") == "43"
    assert await sql_store.get("user-1001") == {
        "external_id": "1001",
        "backing_account_id": "42",
    }


@pytest.mark.asyncio
async def test_delete(sql_store) -> None:
    await sql_store.set("user-1001", {"external_id": "1001"})

    await sql_store.delete("user-1001")
    await sql_store.delete("user-missing")

    assert await sql_store.get("user-1001") is None


@pytest.mark.asyncio
async def test_session_work_runs_off_the_event_loop(sql_store, monkeypatch) -> None:
    seen = []
    original = sql_store._get

    def _recording_get(key):
        seen.append(threading.get_ident())
        return original(key)

    monkeypatch.setattr(sql_store, "_get", _recording_get)

    await sql_store.get("id-a@x.com")

    assert seen and seen[0] != threading.get_ident()

"""Tests for application startup wiring (no real database)."""

import pytest
from fastapi import FastAPI

from tresor.core import lifespan as lifespan_module
from tresor.core.lifespan import create_lifespan
from tresor.domain.exceptions import StorageUnavailableException
from tresor.infrastructure.persistence import database


async def _noop() -> None:
    return None


async def test_startup_fails_without_database_url(monkeypatch) -> None:
    monkeypatch.setattr(database, "get_session_factory", lambda: None)
    with pytest.raises(StorageUnavailableException):
        async with create_lifespan(FastAPI()):
            pass


async def test_startup_warms_cache_before_serving(monkeypatch, entry_store) -> None:
    entry_store.entries["abc"] = ("v", 1)
    monkeypatch.setattr(database, "get_session_factory", lambda: object())
    monkeypatch.setattr(database, "init_schema", _noop)
    monkeypatch.setattr(lifespan_module, "SqlEntryStore", lambda factory: entry_store)
    app = FastAPI()
    async with create_lifespan(app):
        assert app.state.entry_cache.is_ready
        assert app.state.entry_cache.get("abc") == "v"
        assert app.state.entry_store is entry_store
    assert entry_store.scans == 1


async def test_startup_aborts_when_store_stays_down(monkeypatch, entry_store) -> None:
    entry_store.unavailable = True
    monkeypatch.setattr(database, "get_session_factory", lambda: object())
    monkeypatch.setattr(database, "init_schema", _noop)
    monkeypatch.setattr(lifespan_module, "SqlEntryStore", lambda factory: entry_store)
    monkeypatch.setenv("CACHE_WARM_MAX_ATTEMPTS", "2")
    monkeypatch.setenv("CACHE_WARM_RETRY_DELAY_SECONDS", "0")
    lifespan_module.get_settings.cache_clear()
    try:
        with pytest.raises(StorageUnavailableException):
            async with create_lifespan(FastAPI()):
                pass
    finally:
        monkeypatch.undo()
        lifespan_module.get_settings.cache_clear()
    assert entry_store.scans == 2

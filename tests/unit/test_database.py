# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the process-wide default database handle."""

from __future__ import annotations

from pathlib import Path

import pytest

import like_sqlite.storage.database as db_mod
from like_sqlite.core.config import Settings
from like_sqlite.core.exceptions import StorageError
from like_sqlite.storage.database import close_db, get_db, init_db
from like_sqlite.storage.sqlite_backend import LikeSQLite


@pytest.fixture(autouse=True)
async def _reset_default_db():
    db_mod._db = None
    yield
    await close_db()


class TestDefaultDatabase:
    async def test_get_before_init(self) -> None:
        with pytest.raises(StorageError, match="not initialized"):
            await get_db()

    async def test_init_returns_open_handle(self, db_file: Path) -> None:
        db = await init_db(db_file)
        assert isinstance(db, LikeSQLite)
        assert db.is_open is True
        assert await get_db() is db

    async def test_init_is_idempotent(self, db_file: Path, tmp_path: Path) -> None:
        first = await init_db(db_file)
        second = await init_db(tmp_path / "other.db")
        assert first is second

    async def test_uses_settings(self, db_file: Path) -> None:
        settings = Settings(db_path=db_file, journal_mode="WAL")
        db = await init_db(settings=settings)
        assert db.file == str(db_file)
        assert await db.pragma("journal_mode", simple=True) == "wal"

    async def test_env_configuration(self, db_file: Path, monkeypatch) -> None:
        monkeypatch.setenv("LIKESQLITE_DB_PATH", str(db_file))
        monkeypatch.setenv("LIKESQLITE_FOREIGN_KEYS", "true")
        db = await init_db()
        assert db.file == str(db_file)
        assert await db.pragma("foreign_keys", simple=True) == 1

    async def test_close(self, db_file: Path) -> None:
        db = await init_db(db_file)
        await close_db()
        assert db.is_open is False
        with pytest.raises(StorageError):
            await get_db()
        # Safe to call twice
        await close_db()

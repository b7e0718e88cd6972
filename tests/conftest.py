# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from pathlib import Path

import pytest

from like_sqlite.storage.sqlite_backend import LikeSQLite


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    return tmp_path / "database.db"


@pytest.fixture
async def db(db_file: Path):
    """A file-backed adapter that is closed after the test."""
    adapter = LikeSQLite(db_file)
    yield adapter
    await adapter.end()


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    """Keep LIKESQLITE_* variables from the host out of settings."""
    import os

    for key in list(os.environ):
        if key.startswith("LIKESQLITE_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging() so they never outlive a test."""
    import logging

    root = logging.getLogger("like_sqlite")
    yield
    root.handlers.clear()
    root.setLevel(logging.NOTSET)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Process-wide default database handle.

The handle is configured from :class:`~like_sqlite.core.config.Settings`
(``LIKESQLITE_*`` env vars) unless explicit arguments are given.
"""

from __future__ import annotations

from pathlib import Path

from like_sqlite.core.config import Settings, get_settings
from like_sqlite.core.exceptions import StorageError
from like_sqlite.storage.sqlite_backend import LikeSQLite

_db: LikeSQLite | None = None


async def init_db(
    db_path: Path | str | None = None,
    *,
    settings: Settings | None = None,
) -> LikeSQLite:
    """Open the default database and return it.

    Subsequent calls return the already-open handle until :func:`close_db`.
    Engine errors while opening propagate unchanged.
    """
    global _db

    if _db is not None:
        return _db

    settings = settings or get_settings()
    db = LikeSQLite(db_path or settings.db_path, settings.connection_options())
    await db.connect()
    _db = db
    return _db


async def get_db() -> LikeSQLite:
    """Get the default database handle.

    Raises StorageError if the database has not been initialized.
    """
    if _db is None:
        raise StorageError("Database not initialized. Call init_db() first.")
    return _db


async def close_db() -> None:
    """Close the default database handle."""
    global _db

    if _db is not None:
        await _db.end()
        _db = None

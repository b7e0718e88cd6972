# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite implementation of the abstract :class:`SQLBackend`.

Wraps an :mod:`aiosqlite` connection.  The blocking engine runs on
aiosqlite's worker thread, so awaiting a statement hands control back to the
event loop until the engine is done.  Every statement commits on its own.
"""

from __future__ import annotations

import asyncio
import functools
import importlib
import sqlite3
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType
from typing import Any

import aiosqlite

from like_sqlite.core.constants import (
    DEFAULT_DRIVER,
    DEFAULT_SCHEMA,
    ER_DUP_ENTRY,
    ITER_CHUNK_SIZE,
    MEMORY_DATABASE,
    SQLITE_CONSTRAINT_UNIQUE,
    UNIQUE_VIOLATION_PREFIX,
    UNSUPPORTED_BY_SQLITE,
)
from like_sqlite.core.exceptions import (
    ConfigurationError,
    SQLError,
    StorageError,
    UnsupportedOperationError,
)
from like_sqlite.core.logging import compact_sql, get_logger
from like_sqlite.models.options import ColumnField, ConnectionOptions, RunResult
from like_sqlite.storage.backend import SQLBackend

logger = get_logger("storage")


class LikeSQLite(SQLBackend):
    """Async CRUD adapter over a single SQLite database file.

    The file is opened lazily on first use; call :meth:`connect` (or use
    :meth:`open` / ``async with``) to open it eagerly and surface errors early.

    Parameters:
        file: Path of the database file, or ``":memory:"``.
        options: Connection options; keyword *overrides* are merged on top.
    """

    type = "sqlite"

    def __init__(
        self,
        file: Path | str = MEMORY_DATABASE,
        options: ConnectionOptions | None = None,
        **overrides: Any,
    ) -> None:
        # SQLite has no per-table charset/collation/engine clauses
        super().__init__(database=DEFAULT_SCHEMA, charset=None, collate=None, engine=None)

        opts = options or ConnectionOptions()
        if overrides:
            opts = ConnectionOptions.model_validate({**opts.model_dump(), **overrides})

        self.file = str(file) if str(file) else MEMORY_DATABASE
        self.options = opts
        if self.options.readonly and self.in_memory:
            raise ConfigurationError("In-memory databases cannot be readonly")

        self._conn: aiosqlite.Connection | None = None
        self._driver: ModuleType | None = None
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Factory / connection
    # ------------------------------------------------------------------

    @classmethod
    async def open(
        cls,
        file: Path | str = MEMORY_DATABASE,
        options: ConnectionOptions | None = None,
        **overrides: Any,
    ) -> LikeSQLite:
        """Create a :class:`LikeSQLite` and open its database file."""
        db = cls(file, options, **overrides)
        await db.connect()
        return db

    @property
    def in_memory(self) -> bool:
        return self.file == MEMORY_DATABASE or self.file.startswith("file::memory:")

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def raw_connection(self) -> aiosqlite.Connection:
        """Return the underlying :class:`aiosqlite.Connection`."""
        if self._conn is None:
            raise StorageError("Database is not open. Call connect() first.")
        return self._conn

    @property
    def driver_error(self) -> type[Exception]:
        """Base ``Error`` class of the DB-API binding in use."""
        if self._driver is None:
            return sqlite3.Error
        return self._driver.Error

    async def connect(self) -> LikeSQLite:
        async with self._lock:
            if self._conn is None:
                self._conn = await self._open()
        return self

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            await self.connect()
        return self._conn  # type: ignore[return-value]

    async def _open(self) -> aiosqlite.Connection:
        opts = self.options
        driver = _load_driver(opts.native_binding)
        self._driver = driver
        target, uri = self._target()

        kwargs: dict[str, Any] = {
            "timeout": opts.timeout,
            "isolation_level": None,
            "uri": uri,
        }
        if opts.native_binding:
            connector = functools.partial(driver.connect, target, **kwargs)
            conn = await aiosqlite.Connection(connector, ITER_CHUNK_SIZE)
        else:
            conn = await aiosqlite.connect(target, **kwargs)
        conn.row_factory = driver.Row

        try:
            if opts.verbose:
                await conn.set_trace_callback(_trace_hook(opts.verbose))
            if opts.journal_mode:
                await conn.execute(f"PRAGMA journal_mode = {opts.journal_mode}")
            if opts.synchronous:
                await conn.execute(f"PRAGMA synchronous = {opts.synchronous}")
            if opts.foreign_keys is not None:
                await conn.execute(f"PRAGMA foreign_keys = {'ON' if opts.foreign_keys else 'OFF'}")
        except Exception:
            await conn.close()
            raise

        logger.info(
            "Opened SQLite database %s (readonly=%s, binding=%s)",
            self.file,
            opts.readonly,
            driver.__name__,
        )
        return conn

    def _target(self) -> tuple[str, bool]:
        """Return the connect() target and whether it is a URI."""
        if self.in_memory:
            return self.file, self.file.startswith("file:")
        if self.options.readonly:
            return Path(self.file).resolve().as_uri() + "?mode=ro", True
        if self.options.file_must_exist:
            return Path(self.file).resolve().as_uri() + "?mode=rw", True
        return self.file, False

    # ------------------------------------------------------------------
    # Engine hooks
    # ------------------------------------------------------------------

    async def _create_database(self, sql: str) -> Any:
        raise UnsupportedOperationError(UNSUPPORTED_BY_SQLITE)

    async def _drop_database(self, sql: str) -> Any:
        raise UnsupportedOperationError(UNSUPPORTED_BY_SQLITE)

    async def _create_table(self, sql: str) -> None:
        await self.execute(sql)

    async def _drop_table(self, sql: str) -> None:
        await self.execute(sql)

    async def _insert(self, sql: str, values: list[Any]) -> int | None:
        info = await self.execute(sql, values)
        return info.last_insert_rowid

    async def _select(self, sql: str, values: list[Any]) -> list[dict[str, Any]]:
        rows, _ = await self.query(sql, values)
        return rows

    async def _select_one(self, sql: str, values: list[Any]) -> dict[str, Any] | None:
        rows, _ = await self.query(sql, values, fields=False)
        return rows[0] if rows else None

    async def _exists(self, sql: str, values: list[Any]) -> bool:
        rows, _ = await self.query(sql, values, fields=False)
        return bool(_first_value(rows))

    async def _count(self, sql: str, values: list[Any]) -> int:
        rows, _ = await self.query(sql, values, fields=False)
        return int(_first_value(rows) or 0)

    async def _update(self, sql: str, values: list[Any]) -> int:
        # Rows matched by the filter, including ones whose value did not change
        info = await self.execute(sql, values)
        return info.changes

    async def _delete(self, sql: str, values: list[Any]) -> int:
        info = await self.execute(sql, values)
        return info.changes

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    async def execute(self, sql: str, values: Sequence[Any] | None = None) -> RunResult:
        conn = await self._connection()
        logger.debug("execute: %s", compact_sql(sql))
        try:
            async with conn.execute(sql, tuple(values or ())) as cursor:
                return RunResult(
                    changes=max(cursor.rowcount, 0),
                    last_insert_rowid=cursor.lastrowid,
                )
        except self._driver.IntegrityError as exc:  # type: ignore[union-attr]
            if _is_unique_violation(exc):
                logger.debug("Unique constraint violation remapped to %s", ER_DUP_ENTRY)
                raise SQLError(str(exc), ER_DUP_ENTRY) from exc
            raise

    async def query(
        self,
        sql: str,
        values: Sequence[Any] | None = None,
        *,
        fields: bool = True,
    ) -> tuple[list[dict[str, Any]], list[ColumnField] | None]:
        conn = await self._connection()
        logger.debug("query: %s", compact_sql(sql))
        try:
            async with conn.execute(sql, tuple(values or ())) as cursor:
                rows = [dict(row) for row in await cursor.fetchall()]
                columns = None
                if fields:
                    columns = [ColumnField(name=col[0]) for col in cursor.description or ()]
                return rows, columns
        except self._driver.IntegrityError as exc:  # type: ignore[union-attr]
            if _is_unique_violation(exc):
                logger.debug("Unique constraint violation remapped to %s", ER_DUP_ENTRY)
                raise SQLError(str(exc), ER_DUP_ENTRY) from exc
            raise

    async def pragma(self, directive: str, *, simple: bool = False) -> Any:
        """Run ``PRAGMA <directive>`` and return its rows.

        With *simple*, return only the first column of the first row
        (``None`` when the directive produces no rows).
        """
        rows, _ = await self.query(f"PRAGMA {directive}", fields=False)
        if simple:
            return _first_value(rows)
        return rows

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def end(self) -> None:
        async with self._lock:
            if self._conn is None:
                return
            conn, self._conn = self._conn, None
            await conn.close()
        logger.info("Closed SQLite database %s", self.file)

    async def __aenter__(self) -> LikeSQLite:
        return await self.connect()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_driver(native_binding: str | None) -> ModuleType:
    name = native_binding or DEFAULT_DRIVER
    try:
        driver = importlib.import_module(name)
    except ImportError as exc:
        msg = f"Cannot load SQLite binding {name!r}: {exc}"
        raise ConfigurationError(msg) from exc

    for attr in ("connect", "Row", "Error", "IntegrityError"):
        if not hasattr(driver, attr):
            msg = f"SQLite binding {name!r} is not DB-API compatible (missing {attr})"
            raise ConfigurationError(msg)
    return driver


def _trace_hook(verbose: Any) -> Any:
    if callable(verbose):
        return verbose

    def _log_statement(sql: str) -> None:
        logger.debug("trace: %s", compact_sql(sql))

    return _log_statement


def _is_unique_violation(exc: Exception) -> bool:
    # PRIMARY KEY violations share the UNIQUE message but not the error name
    errorname = getattr(exc, "sqlite_errorname", None)
    if errorname is not None:
        return errorname == SQLITE_CONSTRAINT_UNIQUE
    return str(exc).startswith(UNIQUE_VIOLATION_PREFIX)


def _first_value(rows: list[dict[str, Any]]) -> Any:
    if not rows:
        return None
    return next(iter(rows[0].values()), None)

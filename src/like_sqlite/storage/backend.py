# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Generic query-building base class for pluggable SQL engines.

:class:`SQLBackend` renders the fixed CRUD surface (``insert``, ``select``,
``update`` ...) into parameterized SQL and hands each statement to an
engine-specific hook (``_insert``, ``_select`` ...).  Concrete engines only
execute statements and reshape the results.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

from like_sqlite.models.options import ColumnField, RunResult
from like_sqlite.storage.query_builder import (
    Assignments,
    build_find,
    has_limit,
    qualify_table,
    quote_identifier,
    render_assignments,
    render_columns,
)


class SQLBackend(abc.ABC):
    """Abstract base class for async CRUD backends.

    Attributes:
        type: Engine family name, e.g. ``"sqlite"``.
        database: Default schema that unqualified table names resolve to.
        charset / collate / engine: Table options used by engines that
            support them; ``None`` leaves them out of rendered DDL.
    """

    type: str = "sql"

    def __init__(
        self,
        *,
        database: str = "",
        charset: str | None = "utf8mb4",
        collate: str | None = "utf8mb4_unicode_ci",
        engine: str | None = "InnoDB",
    ) -> None:
        self.database = database
        self.charset = charset
        self.collate = collate
        self.engine = engine

    def _table(self, name: str) -> str:
        return qualify_table(self.database, name)

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    async def create_database(self, name: str) -> Any:
        sql = f"CREATE DATABASE IF NOT EXISTS {quote_identifier(name)}"
        if self.charset:
            sql += f" DEFAULT CHARACTER SET {self.charset}"
        if self.collate:
            sql += f" COLLATE {self.collate}"
        return await self._create_database(sql)

    async def drop_database(self, name: str) -> Any:
        return await self._drop_database(f"DROP DATABASE IF EXISTS {quote_identifier(name)}")

    async def create_table(
        self,
        name: str,
        columns: Mapping[str, str],
        *,
        without_rowid: bool = False,
    ) -> Any:
        """Create *name* if missing.

        Args:
            columns: Column name to column definition, e.g.
                ``{"id": "INTEGER PRIMARY KEY", "name": "TEXT NULL"}``.
                Keys that are table constraints (``PRIMARY KEY``,
                ``UNIQUE``, ``FOREIGN KEY``, ``CHECK``, ``CONSTRAINT``) are
                emitted as ``KEY definition`` without quoting.
            without_rowid: Append ``WITHOUT ROWID`` for engines that support it.
        """
        if not columns:
            raise ValueError("Table requires at least one column")

        defs = []
        for col, definition in columns.items():
            if col.upper().startswith(("PRIMARY KEY", "UNIQUE", "FOREIGN KEY", "CHECK", "CONSTRAINT")):
                defs.append(f"{col} {definition}".strip())
            else:
                defs.append(f"{quote_identifier(col)} {definition}".strip())

        sql = f"CREATE TABLE IF NOT EXISTS {self._table(name)} ({', '.join(defs)})"
        if without_rowid:
            sql += " WITHOUT ROWID"
        if self.engine:
            sql += f" ENGINE={self.engine}"
        if self.charset:
            sql += f" DEFAULT CHARSET={self.charset}"
        if self.collate:
            sql += f" COLLATE={self.collate}"
        return await self._create_table(sql)

    async def drop_table(self, name: str) -> Any:
        return await self._drop_table(f"DROP TABLE IF EXISTS {self._table(name)}")

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def insert(self, table: str, data: Mapping[str, Any]) -> Any:
        """Insert one row and return the engine's identifier for it."""
        if not data:
            raise ValueError("Insert requires at least one column")
        cols = ", ".join(quote_identifier(col) for col in data)
        marks = ", ".join("?" for _ in data)
        sql = f"INSERT INTO {self._table(table)} ({cols}) VALUES ({marks})"
        return await self._insert(sql, list(data.values()))

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        find: str | None = None,
        *values: Any,
    ) -> list[dict[str, Any]]:
        sql = f"SELECT {render_columns(columns)} FROM {self._table(table)}{build_find(find)}"
        return await self._select(sql, list(values))

    async def select_one(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        find: str | None = None,
        *values: Any,
    ) -> dict[str, Any] | None:
        sql = f"SELECT {render_columns(columns)} FROM {self._table(table)}{build_find(find)}"
        if not has_limit(find):
            sql += " LIMIT 1"
        return await self._select_one(sql, list(values))

    async def exists(self, table: str, find: str | None = None, *values: Any) -> bool:
        sql = f"SELECT EXISTS(SELECT 1 FROM {self._table(table)}{build_find(find)}"
        if not has_limit(find):
            sql += " LIMIT 1"
        sql += ")"
        return await self._exists(sql, list(values))

    async def count(self, table: str, find: str | None = None, *values: Any) -> int:
        sql = f"SELECT COUNT(1) FROM {self._table(table)}{build_find(find)}"
        return await self._count(sql, list(values))

    async def update(
        self,
        table: str,
        data: Assignments,
        find: str | None = None,
        *values: Any,
    ) -> int:
        """Update matching rows and return how many changed.

        ``data`` may be ``{"col": value}`` or ``({"col": "col + ?"}, 1)``
        for expressions.
        """
        sets, params = render_assignments(data)
        sql = f"UPDATE {self._table(table)} SET {sets}{build_find(find)}"
        return await self._update(sql, params + list(values))

    async def delete(self, table: str, find: str | None = None, *values: Any) -> int:
        sql = f"DELETE FROM {self._table(table)}{build_find(find)}"
        return await self._delete(sql, list(values))

    # ------------------------------------------------------------------
    # Engine hooks
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def _create_database(self, sql: str) -> Any: ...

    @abc.abstractmethod
    async def _drop_database(self, sql: str) -> Any: ...

    @abc.abstractmethod
    async def _create_table(self, sql: str) -> Any: ...

    @abc.abstractmethod
    async def _drop_table(self, sql: str) -> Any: ...

    @abc.abstractmethod
    async def _insert(self, sql: str, values: list[Any]) -> Any: ...

    @abc.abstractmethod
    async def _select(self, sql: str, values: list[Any]) -> list[dict[str, Any]]: ...

    @abc.abstractmethod
    async def _select_one(self, sql: str, values: list[Any]) -> dict[str, Any] | None: ...

    @abc.abstractmethod
    async def _exists(self, sql: str, values: list[Any]) -> bool: ...

    @abc.abstractmethod
    async def _count(self, sql: str, values: list[Any]) -> int: ...

    @abc.abstractmethod
    async def _update(self, sql: str, values: list[Any]) -> int: ...

    @abc.abstractmethod
    async def _delete(self, sql: str, values: list[Any]) -> int: ...

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def execute(self, sql: str, values: Sequence[Any] | None = None) -> RunResult:
        """Run a statement that does not return rows."""

    @abc.abstractmethod
    async def query(
        self,
        sql: str,
        values: Sequence[Any] | None = None,
        *,
        fields: bool = True,
    ) -> tuple[list[dict[str, Any]], list[ColumnField] | None]:
        """Run a statement and return ``(rows, fields)``."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def end(self) -> None:
        """Release the underlying connection."""

    async def close(self) -> None:
        await self.end()

    async def __aenter__(self) -> SQLBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.end()

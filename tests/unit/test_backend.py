# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the generic CRUD base class: rendered SQL and hook dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from like_sqlite.models.options import RunResult
from like_sqlite.storage.backend import SQLBackend


class RecordingBackend(SQLBackend):
    """Backend that records (hook, sql, values) instead of executing."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.calls: list[tuple[str, str, list[Any] | None]] = []
        self.ended = False

    def _record(self, hook: str, sql: str, values: list[Any] | None = None) -> str:
        self.calls.append((hook, sql, values))
        return hook

    async def _create_database(self, sql):
        return self._record("create_database", sql)

    async def _drop_database(self, sql):
        return self._record("drop_database", sql)

    async def _create_table(self, sql):
        return self._record("create_table", sql)

    async def _drop_table(self, sql):
        return self._record("drop_table", sql)

    async def _insert(self, sql, values):
        return self._record("insert", sql, values)

    async def _select(self, sql, values):
        return self._record("select", sql, values)

    async def _select_one(self, sql, values):
        return self._record("select_one", sql, values)

    async def _exists(self, sql, values):
        return self._record("exists", sql, values)

    async def _count(self, sql, values):
        return self._record("count", sql, values)

    async def _update(self, sql, values):
        return self._record("update", sql, values)

    async def _delete(self, sql, values):
        return self._record("delete", sql, values)

    async def execute(self, sql, values=None):
        return RunResult()

    async def query(self, sql, values=None, *, fields=True):
        return [], None

    async def end(self):
        self.ended = True


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend(database="main", charset=None, collate=None, engine=None)


def _last(backend: RecordingBackend) -> tuple[str, str, list[Any] | None]:
    return backend.calls[-1]


class TestInterface:
    def test_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            SQLBackend()  # type: ignore[abstract]

    def test_abstract_methods_defined(self) -> None:
        required = {
            "_create_database",
            "_drop_database",
            "_create_table",
            "_drop_table",
            "_insert",
            "_select",
            "_select_one",
            "_exists",
            "_count",
            "_update",
            "_delete",
            "execute",
            "query",
            "end",
        }
        assert required == set(SQLBackend.__abstractmethods__)


class TestRendering:
    async def test_insert(self, backend: RecordingBackend) -> None:
        await backend.insert("users", {"username": "joe", "password": "123"})
        assert _last(backend) == (
            "insert",
            "INSERT INTO `main`.`users` (`username`, `password`) VALUES (?, ?)",
            ["joe", "123"],
        )

    async def test_select_defaults_to_wildcard(self, backend: RecordingBackend) -> None:
        await backend.select("users")
        assert _last(backend) == ("select", "SELECT * FROM `main`.`users`", [])

    async def test_select_with_find(self, backend: RecordingBackend) -> None:
        await backend.select("users", ["password"], "username = ?", "joe")
        assert _last(backend) == (
            "select",
            "SELECT `password` FROM `main`.`users` WHERE username = ?",
            ["joe"],
        )

    async def test_select_one_appends_limit(self, backend: RecordingBackend) -> None:
        await backend.select_one("users", ["*"], "ORDER BY username ASC")
        assert _last(backend)[1] == "SELECT * FROM `main`.`users` ORDER BY username ASC LIMIT 1"

    async def test_select_one_keeps_existing_limit(self, backend: RecordingBackend) -> None:
        await backend.select_one("users", ["*"], "ORDER BY id LIMIT 1 OFFSET 3")
        assert _last(backend)[1] == "SELECT * FROM `main`.`users` ORDER BY id LIMIT 1 OFFSET 3"

    async def test_exists(self, backend: RecordingBackend) -> None:
        await backend.exists("users", "username = ?", "joe")
        assert _last(backend) == (
            "exists",
            "SELECT EXISTS(SELECT 1 FROM `main`.`users` WHERE username = ? LIMIT 1)",
            ["joe"],
        )

    async def test_count(self, backend: RecordingBackend) -> None:
        await backend.count("users")
        assert _last(backend) == ("count", "SELECT COUNT(1) FROM `main`.`users`", [])

    async def test_update_binds_data_before_find(self, backend: RecordingBackend) -> None:
        await backend.update("users", {"username": "alice"}, "username = ?", "bob")
        assert _last(backend) == (
            "update",
            "UPDATE `main`.`users` SET `username` = ? WHERE username = ?",
            ["alice", "bob"],
        )

    async def test_update_with_expression(self, backend: RecordingBackend) -> None:
        await backend.update("users", ({"count": "count + ?"}, 1), "username = ?", "bob")
        assert _last(backend) == (
            "update",
            "UPDATE `main`.`users` SET `count` = count + ? WHERE username = ?",
            [1, "bob"],
        )

    async def test_delete(self, backend: RecordingBackend) -> None:
        await backend.delete("users", "username = ?", "bob")
        assert _last(backend) == (
            "delete",
            "DELETE FROM `main`.`users` WHERE username = ?",
            ["bob"],
        )

    async def test_drop_table(self, backend: RecordingBackend) -> None:
        await backend.drop_table("users")
        assert _last(backend)[1] == "DROP TABLE IF EXISTS `main`.`users`"

    async def test_create_table(self, backend: RecordingBackend) -> None:
        await backend.create_table(
            "users",
            {"id": "INTEGER PRIMARY KEY", "name": "TEXT NULL", "UNIQUE": "(name)"},
            without_rowid=True,
        )
        assert _last(backend)[1] == (
            "CREATE TABLE IF NOT EXISTS `main`.`users` "
            "(`id` INTEGER PRIMARY KEY, `name` TEXT NULL, UNIQUE (name)) WITHOUT ROWID"
        )

    async def test_create_table_requires_columns(self, backend: RecordingBackend) -> None:
        with pytest.raises(ValueError):
            await backend.create_table("users", {})

    async def test_database_ddl(self, backend: RecordingBackend) -> None:
        await backend.create_database("shop")
        assert _last(backend)[1] == "CREATE DATABASE IF NOT EXISTS `shop`"
        await backend.drop_database("shop")
        assert _last(backend)[1] == "DROP DATABASE IF EXISTS `shop`"


class TestTableOptions:
    async def test_charset_and_engine_rendered(self) -> None:
        backend = RecordingBackend(database="app")
        await backend.create_database("app")
        assert _last(backend)[1] == (
            "CREATE DATABASE IF NOT EXISTS `app` "
            "DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )

        await backend.create_table("t", {"a": "INT"})
        assert _last(backend)[1] == (
            "CREATE TABLE IF NOT EXISTS `app`.`t` (`a` INT) "
            "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci"
        )


class TestLifecycle:
    async def test_close_aliases_end(self, backend: RecordingBackend) -> None:
        await backend.close()
        assert backend.ended is True

    async def test_async_context_manager(self) -> None:
        async with RecordingBackend() as backend:
            assert backend.ended is False
        assert backend.ended is True

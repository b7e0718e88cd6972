# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Connection options and normalized engine result models."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from like_sqlite.core.constants import DEFAULT_TIMEOUT, JournalMode, SynchronousMode


def normalize_mode(v: object) -> object:
    """Upper-case a journal/synchronous mode name; blank text means unset."""
    if isinstance(v, str):
        return v.strip().upper() or None
    return v


class ConnectionOptions(BaseModel):
    """Options used to open the embedded database file."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    readonly: bool = False
    file_must_exist: bool = False
    timeout: float = Field(default=DEFAULT_TIMEOUT, ge=0, description="busy/lock timeout in seconds")
    journal_mode: JournalMode | None = None
    synchronous: SynchronousMode | None = None
    foreign_keys: bool | None = None
    verbose: Callable[[str], Any] | bool | None = Field(
        default=None,
        description="trace hook called with each statement; True logs at DEBUG",
    )
    native_binding: str | None = Field(
        default=None,
        description="dotted path of a DB-API 2 sqlite module, e.g. pysqlite3.dbapi2",
    )

    @field_validator("journal_mode", "synchronous", mode="before")
    @classmethod
    def _normalize_mode(cls, v: object) -> object:
        return normalize_mode(v)


class RunResult(BaseModel):
    """Outcome of a statement that does not return rows."""

    changes: int = 0
    last_insert_rowid: int | None = None


class ColumnField(BaseModel):
    """Column metadata attached to query results."""

    name: str

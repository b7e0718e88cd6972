# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""like_sqlite - async CRUD adapter for embedded SQLite databases."""

__version__ = "0.1.0"

from like_sqlite.core.exceptions import (
    ConfigurationError,
    LikeSQLiteError,
    SQLError,
    StorageError,
    UnsupportedOperationError,
)
from like_sqlite.models.options import ColumnField, ConnectionOptions, RunResult
from like_sqlite.storage.backend import SQLBackend
from like_sqlite.storage.sqlite_backend import LikeSQLite

__all__ = [
    "ColumnField",
    "ConfigurationError",
    "ConnectionOptions",
    "LikeSQLite",
    "LikeSQLiteError",
    "RunResult",
    "SQLBackend",
    "SQLError",
    "StorageError",
    "UnsupportedOperationError",
    "__version__",
]

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- generic CRUD base class and the SQLite adapter."""

from like_sqlite.storage.backend import SQLBackend
from like_sqlite.storage.database import close_db, get_db, init_db
from like_sqlite.storage.query_builder import build_find, quote_identifier, render_assignments
from like_sqlite.storage.sqlite_backend import LikeSQLite

__all__ = [
    "LikeSQLite",
    "SQLBackend",
    "build_find",
    "close_db",
    "get_db",
    "init_db",
    "quote_identifier",
    "render_assignments",
]

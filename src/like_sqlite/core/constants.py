# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, error codes, and engine defaults."""

from enum import StrEnum


class JournalMode(StrEnum):
    DELETE = "DELETE"
    TRUNCATE = "TRUNCATE"
    PERSIST = "PERSIST"
    MEMORY = "MEMORY"
    WAL = "WAL"
    OFF = "OFF"


class SynchronousMode(StrEnum):
    OFF = "OFF"
    NORMAL = "NORMAL"
    FULL = "FULL"
    EXTRA = "EXTRA"


# Cross-engine error code used by MySQL-style drivers for duplicate keys
ER_DUP_ENTRY = "ER_DUP_ENTRY"

# Extended result code reported by the driver for UNIQUE violations
SQLITE_CONSTRAINT_UNIQUE = "SQLITE_CONSTRAINT_UNIQUE"
UNIQUE_VIOLATION_PREFIX = "UNIQUE constraint failed"

MEMORY_DATABASE = ":memory:"
DEFAULT_SCHEMA = "main"
DEFAULT_DRIVER = "sqlite3"
DEFAULT_TIMEOUT = 5.0
ITER_CHUNK_SIZE = 64

UNSUPPORTED_BY_SQLITE = "Operation is not supported by SQLite"

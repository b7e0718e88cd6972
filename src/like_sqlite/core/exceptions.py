# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for like_sqlite."""

from like_sqlite.core.constants import ER_DUP_ENTRY


class LikeSQLiteError(Exception):
    """Base exception for all like_sqlite errors."""


class ConfigurationError(LikeSQLiteError):
    """Invalid or missing configuration."""


class StorageError(LikeSQLiteError):
    """Database handle missing or unusable."""


class UnsupportedOperationError(LikeSQLiteError):
    """The embedded engine cannot perform the requested operation."""


class SQLError(LikeSQLiteError):
    """Engine error remapped to a stable, cross-engine error code."""

    def __init__(self, message: str, code: str = ER_DUP_ENTRY) -> None:
        super().__init__(message)
        self.code = code

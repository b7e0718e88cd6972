# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for like_sqlite."""

from like_sqlite.models.options import ColumnField, ConnectionOptions, RunResult

__all__ = [
    "ColumnField",
    "ConnectionOptions",
    "RunResult",
]

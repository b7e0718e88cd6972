# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for query results."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from like_sqlite.models.options import ColumnField, RunResult

console = Console()


def _cell(value: Any) -> str:
    if value is None:
        return "[dim]NULL[/dim]"
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    return str(value)


def format_rows(
    rows: list[dict[str, Any]],
    fields: list[ColumnField] | None = None,
    *,
    title: str | None = None,
) -> None:
    """Print rows as a table; column order follows *fields* when given."""
    names = [f.name for f in fields] if fields else list(rows[0]) if rows else []

    table = Table(title=title)
    for name in names:
        table.add_column(name)
    for row in rows:
        table.add_row(*(_cell(row.get(name)) for name in names))

    console.print(table)
    console.print(f"[dim]{len(rows)} row(s)[/dim]")


def format_rows_json(rows: list[dict[str, Any]]) -> str:
    def _default(value: Any) -> Any:
        if isinstance(value, bytes):
            return value.hex()
        return str(value)

    return json.dumps(rows, indent=2, default=_default)


def format_run_result(info: RunResult) -> None:
    console.print(f"Changes: [bold]{info.changes}[/bold]")
    if info.last_insert_rowid is not None:
        console.print(f"Last insert rowid: [bold]{info.last_insert_rowid}[/bold]")

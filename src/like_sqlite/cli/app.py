# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from like_sqlite.core.exceptions import LikeSQLiteError, StorageError

app = typer.Typer(
    name="like-sqlite",
    help="Run statements against an embedded SQLite database",
    no_args_is_help=True,
)

DbArg = Annotated[Path, typer.Argument(help="SQLite database file")]
ParamsArg = Annotated[
    list[str] | None,
    typer.Argument(help="Positional values bound to ? placeholders (JSON scalars or text)"),
]
ReadonlyOpt = Annotated[bool, typer.Option("--readonly", help="Open the database read-only")]


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override LIKESQLITE_LOG_LEVEL")
    ] = None,
) -> None:
    from like_sqlite.core.config import get_settings
    from like_sqlite.core.logging import setup_logging

    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(1) from exc
    setup_logging(log_level or settings.log_level, settings.log_format)


def _coerce(param: str) -> Any:
    """Interpret a CLI value as a JSON scalar, falling back to plain text."""
    try:
        value = json.loads(param)
    except ValueError:
        return param
    if isinstance(value, (dict, list)):
        return param
    return value


async def _run(db_path: Path, readonly: bool, action: Any) -> Any:
    from like_sqlite.core.config import get_settings
    from like_sqlite.storage.sqlite_backend import LikeSQLite

    options = get_settings().connection_options()
    if readonly:
        options = options.model_copy(update={"readonly": True})

    db = LikeSQLite(db_path, options)
    try:
        async with db:
            return await action(db)
    except db.driver_error as exc:
        # Bindings other than sqlite3 raise their own DB-API error classes
        raise StorageError(str(exc)) from exc


def _invoke(db_path: Path, readonly: bool, action: Any) -> Any:
    try:
        return asyncio.run(_run(db_path, readonly, action))
    except (LikeSQLiteError, ValidationError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command()
def query(
    db_path: DbArg,
    sql: Annotated[str, typer.Argument(help="Statement returning rows")],
    params: ParamsArg = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print rows as JSON")] = False,
    readonly: ReadonlyOpt = False,
) -> None:
    """Run a statement and print the rows it returns."""
    values = [_coerce(p) for p in params or []]
    rows, fields = _invoke(db_path, readonly, lambda db: db.query(sql, values))

    if as_json:
        from like_sqlite.cli.formatters.console import format_rows_json

        sys.stdout.write(format_rows_json(rows) + "\n")
        return

    from like_sqlite.cli.formatters.console import format_rows

    format_rows(rows, fields)


@app.command()
def execute(
    db_path: DbArg,
    sql: Annotated[str, typer.Argument(help="Statement to run")],
    params: ParamsArg = None,
) -> None:
    """Run a statement and print the number of changed rows."""
    from like_sqlite.cli.formatters.console import format_run_result

    values = [_coerce(p) for p in params or []]
    info = _invoke(db_path, False, lambda db: db.execute(sql, values))
    format_run_result(info)


@app.command()
def pragma(
    db_path: DbArg,
    directive: Annotated[str, typer.Argument(help="e.g. 'journal_mode' or 'user_version = 3'")],
    simple: Annotated[
        bool, typer.Option("--simple", help="Print only the first value")
    ] = False,
    readonly: ReadonlyOpt = False,
) -> None:
    """Run an engine-level PRAGMA directive."""
    result = _invoke(db_path, readonly, lambda db: db.pragma(directive, simple=simple))

    if simple:
        typer.echo("" if result is None else str(result))
        return

    from like_sqlite.cli.formatters.console import format_rows

    format_rows(result, title=f"PRAGMA {directive}")


@app.command()
def tables(db_path: DbArg, readonly: ReadonlyOpt = False) -> None:
    """List user tables with their row counts."""

    async def _tables(db: Any) -> list[dict[str, Any]]:
        names = await db.select(
            "sqlite_master",
            ["name"],
            "type = ? AND name NOT LIKE ? ORDER BY name",
            "table",
            "sqlite_%",
        )
        return [{"table": n["name"], "rows": await db.count(n["name"])} for n in names]

    rows = _invoke(db_path, readonly, _tables)
    if not rows:
        typer.echo("No tables found.")
        return

    from like_sqlite.cli.formatters.console import format_rows

    format_rows(rows, title=str(db_path))


@app.command()
def version() -> None:
    """Show version information."""
    from like_sqlite import __version__

    typer.echo(f"like-sqlite v{__version__}")

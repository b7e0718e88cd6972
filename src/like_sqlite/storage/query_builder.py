# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Statement rendering helpers for the generic CRUD base class.

Callers pass a *find* fragment -- the trailing part of a statement such as
``"username = ? ORDER BY username ASC"`` or ``"LIMIT 1"`` -- together with
the positional values bound to its ``?`` markers.  These helpers only glue
fragments together; no SQL parsing is performed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

# Fragments starting with one of these are appended verbatim, not after WHERE.
_TRAILING_CLAUSE = re.compile(
    r"^\s*(ORDER\s+BY|GROUP\s+BY|LIMIT|HAVING|OFFSET|WINDOW)\b",
    re.IGNORECASE,
)
_LIMIT_CLAUSE = re.compile(r"\bLIMIT\b", re.IGNORECASE)

Assignments = Mapping[str, Any] | Sequence[Any]


def quote_identifier(name: str) -> str:
    """Quote *name* with backticks, doubling embedded backticks.

    ``*`` is returned untouched so ``select(table, ["*"])`` stays a wildcard.
    """
    if name == "*":
        return name
    return "`" + name.replace("`", "``") + "`"


def qualify_table(database: str | None, table: str) -> str:
    """Return ``` `database`.`table` ```, or just the table when no schema is set."""
    if not database:
        return quote_identifier(table)
    return f"{quote_identifier(database)}.{quote_identifier(table)}"


def render_columns(columns: Sequence[str] | None) -> str:
    if not columns:
        return "*"
    return ", ".join(quote_identifier(c) for c in columns)


def build_find(find: str | None) -> str:
    """Turn a find fragment into the trailing clause of a statement.

    Returns an empty string, or the fragment prefixed with a single space
    (and ``WHERE`` unless it opens with an ordering/limiting keyword).
    """
    if not find or not find.strip():
        return ""
    fragment = find.strip()
    if _TRAILING_CLAUSE.match(fragment):
        return f" {fragment}"
    return f" WHERE {fragment}"


def has_limit(find: str | None) -> bool:
    """Whether *find* carries a LIMIT keyword outside literals and quoted names."""
    if not find:
        return False
    return _LIMIT_CLAUSE.search(_strip_literals(find)) is not None


def render_assignments(data: Assignments) -> tuple[str, list[Any]]:
    """Render the ``SET`` list of an UPDATE.

    *data* is either a mapping of column to value, each bound as ``?``, or a
    sequence ``(mapping, *values)`` whose mapping holds raw SQL expressions
    (``{"count": "count + ?"}``) bound to the trailing *values*.

    Raises:
        ValueError: If there is nothing to assign or the expression
            placeholders do not match the supplied values.
    """
    if isinstance(data, Mapping):
        if not data:
            raise ValueError("Update requires at least one column")
        sets = ", ".join(f"{quote_identifier(col)} = ?" for col in data)
        return sets, list(data.values())

    if isinstance(data, (str, bytes)) or not data or not isinstance(data[0], Mapping):
        raise ValueError("Update data must be a mapping or (mapping, *values)")

    expressions, values = data[0], list(data[1:])
    if not expressions:
        raise ValueError("Update requires at least one column")
    sets = ", ".join(f"{quote_identifier(col)} = {expr}" for col, expr in expressions.items())

    expected = count_placeholders(sets)
    if expected != len(values):
        msg = f"Update expressions expect {expected} value(s), got {len(values)}"
        raise ValueError(msg)
    return sets, values


def count_placeholders(sql: str) -> int:
    """Count ``?`` markers outside string literals and quoted identifiers."""
    return _strip_literals(sql).count("?")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _strip_literals(sql: str) -> str:
    """Blank out single-quoted literals and backtick-quoted identifiers.

    A doubled quote character inside either span is an escape.
    """
    result: list[str] = []
    quote: str | None = None

    i = 0
    while i < len(sql):
        ch = sql[i]

        if quote is None and ch in "'`":
            quote = ch
        elif ch == quote:
            # Escaped quote ('' or ``)
            if i + 1 < len(sql) and sql[i + 1] == quote:
                i += 2
                continue
            quote = None
        elif quote is None:
            result.append(ch)

        i += 1

    return "".join(result)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with SQL literal redaction."""

import logging
import json
import re
import sys
from typing import Any


LOGGER_NAME = "like_sqlite"

# String literals may carry user data; bound parameters are never logged.
SQL_LITERAL = re.compile(r"'(?:[^']|'')*'")


def redact_sql(text: str) -> str:
    return SQL_LITERAL.sub("'[REDACTED]'", text)


def compact_sql(sql: str) -> str:
    """Collapse whitespace so multi-line DDL logs on a single line."""
    return " ".join(sql.split())


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sql(record.getMessage()),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_sql(str(record.exc_info[1]))
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        return redact_sql(msg)


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from like_sqlite.core.constants import DEFAULT_TIMEOUT, JournalMode, SynchronousMode
from like_sqlite.models.options import ConnectionOptions, normalize_mode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LIKESQLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Database
    db_path: Path = Path("like_sqlite.db")
    readonly: bool = False
    file_must_exist: bool = False
    timeout: float = DEFAULT_TIMEOUT
    journal_mode: JournalMode | None = None
    synchronous: SynchronousMode | None = None
    foreign_keys: bool | None = None
    verbose: bool = False
    native_binding: str | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("journal_mode", "synchronous", mode="before")
    @classmethod
    def _normalize_mode(cls, v: object) -> object:
        return normalize_mode(v)

    def connection_options(self) -> ConnectionOptions:
        return ConnectionOptions(
            readonly=self.readonly,
            file_must_exist=self.file_must_exist,
            timeout=self.timeout,
            journal_mode=self.journal_mode,
            synchronous=self.synchronous,
            foreign_keys=self.foreign_keys,
            verbose=self.verbose or None,
            native_binding=self.native_binding,
        )


def get_settings() -> Settings:
    return Settings()

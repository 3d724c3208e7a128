"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///crm.db"
    log_level: str = "INFO"
    echo_sql: bool = False

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("CRM_ENV", cls.environment),
            database_url=os.getenv("CRM_DATABASE_URL", cls.database_url),
            log_level=os.getenv("CRM_LOG_LEVEL", cls.log_level).upper(),
            echo_sql=_env_bool("CRM_ECHO_SQL", cls.echo_sql),
        )


__all__ = ["AppSettings"]

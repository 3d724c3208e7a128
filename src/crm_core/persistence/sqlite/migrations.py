"""Versioned schema migrations for the CRM SQLite database."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from .models import Base

logger = logging.getLogger(__name__)

Migration = Callable[[AsyncConnection], Awaitable[None]]


async def _create_tables(conn: AsyncConnection) -> None:
    await conn.run_sync(Base.metadata.create_all)


MIGRATIONS: tuple[tuple[int, Migration], ...] = ((1, _create_tables),)


async def apply_migrations(engine: AsyncEngine) -> int:
    """Apply pending migrations and return the resulting schema version."""

    async with engine.begin() as conn:
        await conn.execute(
            text("CREATE TABLE IF NOT EXISTS crm_schema_migrations (version INTEGER PRIMARY KEY)")
        )
        result = await conn.execute(text("SELECT MAX(version) FROM crm_schema_migrations"))
        current = result.scalar() or 0
        for version, migration in MIGRATIONS:
            if version <= current:
                continue
            logger.info("Applying CRM schema migration %s", version)
            await migration(conn)
            await conn.execute(
                text("INSERT INTO crm_schema_migrations (version) VALUES (:version)"),
                {"version": version},
            )
            current = version
    return current


__all__ = ["MIGRATIONS", "apply_migrations"]

"""Async SQLite unit of work implementation."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from crm_core.persistence.interfaces import UnitOfWork

from .migrations import apply_migrations
from .repositories import SQLiteCompanyRepository, SQLiteUserRepository

logger = logging.getLogger(__name__)


class SQLiteUnitOfWork(UnitOfWork):
    """One session per use case; commits on clean exit, rolls back on error."""

    def __init__(self, factory: SQLiteUnitOfWorkFactory) -> None:
        self._factory = factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> SQLiteUnitOfWork:
        await self._factory.ensure_migrated()
        self._session = self._factory.session_factory()
        self.user_repository = SQLiteUserRepository(self._session)
        self.company_repository = SQLiteCompanyRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._session is None:
            return
        try:
            if exc_type is not None:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
                await self._session.rollback()
            else:
                await self._session.commit()
        finally:
            await self._session.close()
            self._session = None

    async def commit(self) -> None:
        await self._require_session().commit()

    async def rollback(self) -> None:
        await self._require_session().rollback()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork session not started")
        return self._session


class SQLiteUnitOfWorkFactory:
    """Owns the engine for a database URL and hands out units of work."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)
        self._migrated = False
        self._migration_lock: asyncio.Lock | None = None

    def __call__(self) -> SQLiteUnitOfWork:
        return SQLiteUnitOfWork(self)

    async def ensure_migrated(self) -> None:
        if self._migrated:
            return
        if self._migration_lock is None:
            self._migration_lock = asyncio.Lock()
        async with self._migration_lock:
            if self._migrated:
                return
            version = await apply_migrations(self.engine)
            logger.debug("Database %s at schema version %s", self.database_url, version)
            self._migrated = True

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_sqlite_unit_of_work_factory(
    database_url: str,
    *,
    echo: bool = False,
) -> SQLiteUnitOfWorkFactory:
    return SQLiteUnitOfWorkFactory(database_url, echo=echo)


__all__ = ["SQLiteUnitOfWork", "SQLiteUnitOfWorkFactory", "create_sqlite_unit_of_work_factory"]

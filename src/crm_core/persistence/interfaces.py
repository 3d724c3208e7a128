"""Persistence layer abstractions for repositories and unit of work."""

from __future__ import annotations

from types import TracebackType
from typing import Protocol

from crm_core.domain import Company, User
from crm_core.domain.types import UserId


class UserRepository(Protocol):
    """Read/write access to users."""

    async def get_user_by_id(self, user_id: UserId) -> User | None: ...

    async def save_user(self, user: User) -> None: ...


class CompanyRepository(Protocol):
    """Access to the single company record."""

    async def get_company(self) -> Company | None: ...

    async def save_company(self, company: Company) -> None: ...

    async def add_company(self, company: Company) -> None: ...


class UnitOfWork(Protocol):
    """Transactional boundary for repository operations."""

    user_repository: UserRepository
    company_repository: CompanyRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

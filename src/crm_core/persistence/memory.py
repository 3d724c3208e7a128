"""In-memory repository implementations for unit testing."""

from __future__ import annotations

import asyncio
from copy import deepcopy
from dataclasses import dataclass, field
from types import TracebackType
from typing import TypeVar

from crm_core.domain import Company, User
from crm_core.domain.types import DomainName, UserId
from crm_core.persistence.errors import MultipleCompaniesError
from crm_core.persistence.interfaces import CompanyRepository, UnitOfWork, UserRepository

T = TypeVar("T")


def _copy(value: T) -> T:
    return deepcopy(value)


@dataclass
class InMemoryUserRepository(UserRepository):
    _users: dict[UserId, User] = field(default_factory=dict)

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        return _copy(self._users.get(user_id))

    async def save_user(self, user: User) -> None:
        self._users[user.user_id] = user


@dataclass
class InMemoryCompanyRepository(CompanyRepository):
    _companies: dict[DomainName, Company] = field(default_factory=dict)

    async def get_company(self) -> Company | None:
        if len(self._companies) > 1:
            msg = f"Expected a single company, found {len(self._companies)}"
            raise MultipleCompaniesError(msg)
        for company in self._companies.values():
            return _copy(company)
        return None

    async def save_company(self, company: Company) -> None:
        if company.domain_name not in self._companies:
            msg = f"Company {company.domain_name} not found"
            raise KeyError(msg)
        self._companies[company.domain_name] = company

    async def add_company(self, company: Company) -> None:
        if company.domain_name in self._companies:
            msg = f"Company {company.domain_name} already exists"
            raise ValueError(msg)
        self._companies[company.domain_name] = company


@dataclass
class InMemoryUnitOfWork(UnitOfWork):
    user_repository: InMemoryUserRepository = field(default_factory=InMemoryUserRepository)
    company_repository: InMemoryCompanyRepository = field(
        default_factory=InMemoryCompanyRepository
    )
    committed: int = 0
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _snapshot: tuple[dict[UserId, User], dict[DomainName, Company]] | None = None

    async def __aenter__(self) -> InMemoryUnitOfWork:
        await self._lock.acquire()
        self._take_snapshot()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                self._restore_snapshot()
        finally:
            self._snapshot = None
            self._lock.release()

    async def commit(self) -> None:
        self.committed += 1
        self._take_snapshot()

    async def rollback(self) -> None:
        self._restore_snapshot()

    def _take_snapshot(self) -> None:
        self._snapshot = (
            _copy(self.user_repository._users),
            _copy(self.company_repository._companies),
        )

    def _restore_snapshot(self) -> None:
        if self._snapshot is None:
            return
        users, companies = self._snapshot
        self.user_repository._users = _copy(users)
        self.company_repository._companies = _copy(companies)

"""SQLite repository implementations."""

from __future__ import annotations

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crm_core.domain import Company, User, UserType
from crm_core.domain.types import DomainName, UserId
from crm_core.persistence.errors import ConcurrencyError, MultipleCompaniesError, NotFoundError
from crm_core.persistence.interfaces import CompanyRepository, UserRepository

from .models import CompanyRecord, UserRecord


def _to_user(record: UserRecord) -> User:
    return User(
        user_id=UserId(record.user_id),
        email=record.email,
        user_type=UserType(record.type),
        is_email_confirmed=record.is_email_confirmed,
    )


def _to_company(record: CompanyRecord) -> Company:
    return Company(
        domain_name=DomainName(record.domain_name),
        number_of_employees=record.number_of_employees,
    )


class SQLiteUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        record = await self._session.get(UserRecord, int(user_id))
        if record is None:
            return None
        return _to_user(record)

    async def save_user(self, user: User) -> None:
        record = await self._session.get(UserRecord, int(user.user_id))
        if record is None:
            record = UserRecord(
                user_id=int(user.user_id),
                email=user.email,
                type=user.user_type.value,
                is_email_confirmed=user.is_email_confirmed,
            )
            self._session.add(record)
        else:
            record.email = user.email
            record.type = user.user_type.value
            record.is_email_confirmed = user.is_email_confirmed


class SQLiteCompanyRepository(CompanyRepository):
    """Company access with an optimistic check on the employee count.

    ``save_company`` only writes when the stored count still equals the one
    this unit of work last read, so racing use cases cannot lose an update.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._read_counts: dict[str, int] = {}

    async def get_company(self) -> Company | None:
        stmt: Select[tuple[CompanyRecord]] = (
            select(CompanyRecord).limit(2).execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        records = result.scalars().all()
        if len(records) > 1:
            raise MultipleCompaniesError("Expected a single company row")
        if not records:
            return None
        record = records[0]
        self._read_counts[record.domain_name] = record.number_of_employees
        return _to_company(record)

    async def save_company(self, company: Company) -> None:
        expected = self._read_counts.get(company.domain_name)
        if expected is None:
            record = await self._session.get(CompanyRecord, company.domain_name)
            if record is None:
                msg = f"Company {company.domain_name} not found"
                raise NotFoundError(msg)
            expected = record.number_of_employees

        stmt = (
            update(CompanyRecord)
            .where(
                CompanyRecord.domain_name == company.domain_name,
                CompanyRecord.number_of_employees == expected,
            )
            .values(number_of_employees=company.number_of_employees)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            msg = (
                f"Company {company.domain_name} changed since it was read "
                f"(expected {expected} employees)"
            )
            raise ConcurrencyError(msg)
        self._read_counts[company.domain_name] = company.number_of_employees

    async def add_company(self, company: Company) -> None:
        self._session.add(
            CompanyRecord(
                domain_name=company.domain_name,
                number_of_employees=company.number_of_employees,
            )
        )

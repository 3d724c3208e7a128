from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from crm_core.domain import Company, DomainName, User, UserId, UserType
from crm_core.messaging import DomainLogger, InMemoryBus, MessageBus
from crm_core.orchestration import OK, EventDispatcher, UserService
from crm_core.persistence import ConcurrencyError, MultipleCompaniesError, UnitOfWork
from crm_core.persistence.sqlite import create_sqlite_unit_of_work_factory


def _db_url(tmp_path: Path) -> str:
    db_file = tmp_path / "crm.db"
    return f"sqlite+aiosqlite:///{db_file}"


def test_sqlite_user_and_company_round_trip(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))
    user = User(
        user_id=UserId(1),
        email="x@acme.com",
        user_type=UserType.EMPLOYEE,
        is_email_confirmed=True,
    )
    company = Company(domain_name=DomainName("acme.com"), number_of_employees=1)

    async def _store() -> None:
        async with factory() as uow:
            await uow.user_repository.save_user(user)
            await uow.company_repository.add_company(company)
            await uow.commit()

    asyncio.run(_store())

    async def _load() -> tuple[User | None, Company | None]:
        async with factory() as uow:
            return (
                await uow.user_repository.get_user_by_id(UserId(1)),
                await uow.company_repository.get_company(),
            )

    loaded_user, loaded_company = asyncio.run(_load())
    assert loaded_user == user
    assert loaded_company == company


def test_sqlite_rolls_back_on_error(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))

    async def _fail() -> None:
        async with factory() as uow:
            await uow.user_repository.save_user(
                User(user_id=UserId(2), email="a@b.com", user_type=UserType.CUSTOMER)
            )
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(_fail())

    async def _load() -> User | None:
        async with factory() as uow:
            return await uow.user_repository.get_user_by_id(UserId(2))

    assert asyncio.run(_load()) is None


def test_sqlite_get_company_rejects_multiple_rows(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))

    async def _run() -> None:
        async with factory() as uow:
            await uow.company_repository.add_company(Company(domain_name=DomainName("a.com")))
            await uow.company_repository.add_company(Company(domain_name=DomainName("b.com")))
            await uow.commit()
            await uow.company_repository.get_company()

    with pytest.raises(MultipleCompaniesError):
        asyncio.run(_run())


def test_user_service_against_sqlite(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))
    bus = InMemoryBus()

    def dispatcher_factory(uow: UnitOfWork) -> EventDispatcher:
        return EventDispatcher(MessageBus(bus, uow.user_repository), DomainLogger())

    service = UserService(factory, dispatcher_factory)

    async def _seed() -> None:
        async with factory() as uow:
            await uow.company_repository.add_company(
                Company(domain_name=DomainName("acme.com"), number_of_employees=5)
            )
            await uow.commit()

    asyncio.run(_seed())
    assert asyncio.run(service.save_user(UserId(1), "x@other.com", UserType.CUSTOMER, False)) == OK
    assert asyncio.run(service.change_email(UserId(1), "y@acme.com")) == OK

    async def _load() -> tuple[User | None, Company | None]:
        async with factory() as uow:
            return (
                await uow.user_repository.get_user_by_id(UserId(1)),
                await uow.company_repository.get_company(),
            )

    user, company = asyncio.run(_load())
    assert user is not None and company is not None
    assert user.email == "y@acme.com"
    assert user.user_type is UserType.EMPLOYEE
    assert company.number_of_employees == 6
    assert bus.sent == ["Type: USER EMAIL CHANGED; Id: 1; NewEmail: y@acme.com"]


def _seed_company(factory, employees: int) -> None:
    async def _run() -> None:
        async with factory() as uow:
            await uow.company_repository.add_company(
                Company(domain_name=DomainName("acme.com"), number_of_employees=employees)
            )
            await uow.commit()

    asyncio.run(_run())


def test_sqlite_stale_company_write_is_refused(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))
    _seed_company(factory, 5)

    async def _race() -> None:
        async with factory() as first, factory() as second:
            first_company = await first.company_repository.get_company()
            second_company = await second.company_repository.get_company()
            assert first_company is not None and second_company is not None

            await first.company_repository.save_company(
                first_company.change_number_of_employees(1)
            )
            await first.commit()

            await second.company_repository.save_company(
                second_company.change_number_of_employees(1)
            )

    with pytest.raises(ConcurrencyError):
        asyncio.run(_race())

    async def _load() -> Company | None:
        async with factory() as uow:
            return await uow.company_repository.get_company()

    loaded = asyncio.run(_load())
    assert loaded is not None
    assert loaded.number_of_employees == 6


def test_concurrent_email_changes_keep_employee_count(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))
    bus = InMemoryBus()

    def dispatcher_factory(uow: UnitOfWork) -> EventDispatcher:
        return EventDispatcher(MessageBus(bus, uow.user_repository), DomainLogger())

    service = UserService(factory, dispatcher_factory)
    _seed_company(factory, 5)
    assert asyncio.run(service.save_user(UserId(1), "x@other.com", UserType.CUSTOMER, False)) == OK
    assert asyncio.run(service.save_user(UserId(2), "z@other.com", UserType.CUSTOMER, False)) == OK

    async def _race() -> list[object]:
        return await asyncio.gather(
            service.change_email(UserId(1), "a@acme.com"),
            service.change_email(UserId(2), "b@acme.com"),
            return_exceptions=True,
        )

    outcomes = asyncio.run(_race())
    assert all(outcome == OK or isinstance(outcome, ConcurrencyError) for outcome in outcomes)
    assert OK in outcomes

    async def _load() -> tuple[list[User | None], Company | None]:
        async with factory() as uow:
            users = [
                await uow.user_repository.get_user_by_id(UserId(1)),
                await uow.user_repository.get_user_by_id(UserId(2)),
            ]
            return users, await uow.company_repository.get_company()

    users, company = asyncio.run(_load())
    assert company is not None
    employees = [user for user in users if user is not None and user.user_type is UserType.EMPLOYEE]
    assert company.number_of_employees == 5 + len(employees)
    assert len(employees) == outcomes.count(OK)

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from crm_core.config import AppSettings
from crm_core.container import build_container
from crm_core.domain import UserId, UserType
from crm_core.messaging import InMemoryBus


def test_build_container_wires_sqlite(tmp_path: Path) -> None:
    db_url = f"sqlite+aiosqlite:///{tmp_path/'nested'/'container.db'}"
    settings = AppSettings(environment="test", database_url=db_url)

    container = build_container(settings)

    assert (tmp_path / "nested").exists()
    assert isinstance(container.bus, InMemoryBus)

    async def _round_trip() -> object:
        async with container.unit_of_work_factory() as uow:
            return await uow.company_repository.get_company()

    assert asyncio.run(_round_trip()) is None


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CRM_ENV", "staging")
    monkeypatch.setenv("CRM_DATABASE_URL", "sqlite+aiosqlite:///tmp/x.db")
    monkeypatch.setenv("CRM_LOG_LEVEL", "debug")
    monkeypatch.setenv("CRM_ECHO_SQL", "no")

    settings = AppSettings.from_env()

    assert settings.environment == "staging"
    assert settings.database_url == "sqlite+aiosqlite:///tmp/x.db"
    assert settings.log_level == "DEBUG"
    assert settings.echo_sql is False


def test_user_service_logs_under_its_own_module(tmp_path: Path, caplog) -> None:
    settings = AppSettings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path/'logging.db'}",
    )
    container = build_container(settings)

    with caplog.at_level(logging.INFO, logger="crm_core.orchestration.user_service"):
        asyncio.run(
            container.user_service.save_user(UserId(1), "a@b.com", UserType.CUSTOMER, False)
        )

    names = {record.name for record in caplog.records}
    assert "crm_core.orchestration.user_service" in names
    assert "crm_core.container" not in names

"""Service container wiring application components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from crm_core.config import AppSettings
from crm_core.messaging import Bus, DomainLogger, InMemoryBus, MessageBus
from crm_core.orchestration import EventDispatcher, UnitOfWorkFactory, UserService
from crm_core.persistence import UnitOfWork
from crm_core.persistence.sqlite import create_sqlite_unit_of_work_factory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Aggregates the collaborators shared by every use case."""

    settings: AppSettings
    unit_of_work_factory: UnitOfWorkFactory
    bus: Bus
    domain_logger: DomainLogger
    user_service: UserService


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith("sqlite"):
        return
    try:
        _, path = database_url.split(":///", maxsplit=1)
    except ValueError:
        return
    if not path or path == ":memory:":
        return
    db_path = Path(path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)


def build_container(
    settings: AppSettings | None = None,
    *,
    bus: Bus | None = None,
) -> ServiceContainer:
    """Construct the primary service container."""

    resolved_settings = settings or AppSettings.from_env()
    _ensure_sqlite_directory(resolved_settings.database_url)
    unit_of_work_factory = create_sqlite_unit_of_work_factory(
        resolved_settings.database_url,
        echo=resolved_settings.echo_sql,
    )
    resolved_bus = bus if bus is not None else InMemoryBus()
    domain_logger = DomainLogger()

    # Commands issued from events must persist through the same unit of work.
    def dispatcher_factory(uow: UnitOfWork) -> EventDispatcher:
        return EventDispatcher(MessageBus(resolved_bus, uow.user_repository), domain_logger)

    user_service = UserService(unit_of_work_factory, dispatcher_factory)
    logger.debug("Container built for %s environment", resolved_settings.environment)

    return ServiceContainer(
        settings=resolved_settings,
        unit_of_work_factory=unit_of_work_factory,
        bus=resolved_bus,
        domain_logger=domain_logger,
        user_service=user_service,
    )


__all__ = ["ServiceContainer", "build_container"]

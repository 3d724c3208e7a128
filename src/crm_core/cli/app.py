"""Typer CLI wiring CRM services."""

from __future__ import annotations

import asyncio
import logging

import typer

from crm_core.domain import Company, DomainName, PreconditionError, User, UserId, UserType
from crm_core.orchestration import OK
from crm_core.persistence import NotFoundError

from .deps import get_container

app = typer.Typer(help="CRM core command-line interface")


@app.callback()
def configure() -> None:
    """Configure logging from the resolved settings."""

    settings = get_container().settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings."""

    settings = get_container().settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Database URL:\t" + settings.database_url)
    typer.echo("Log level:\t" + settings.log_level)


@app.command("add-company")
def add_company(
    domain_name: str,
    employees: int = typer.Option(0, min=0, help="Current number of employees"),
) -> None:
    """Register the company whose domain marks corporate emails."""

    container = get_container()
    company = Company(domain_name=DomainName(domain_name), number_of_employees=employees)

    async def _persist() -> Company | None:
        async with container.unit_of_work_factory() as uow:
            existing = await uow.company_repository.get_company()
            if existing is not None:
                return existing
            await uow.company_repository.add_company(company)
            await uow.commit()
            return None

    existing = asyncio.run(_persist())
    if existing is not None:
        typer.echo(f"Company {existing.domain_name} is already registered")
        raise typer.Exit(code=1)
    typer.echo(f"Registered company {company.domain_name}")


@app.command("save-user")
def save_user(
    user_id: int,
    email: str,
    user_type: UserType = typer.Option(UserType.CUSTOMER, "--type", case_sensitive=False),
    confirmed: bool = typer.Option(False, "--confirmed/--unconfirmed"),
) -> None:
    """Create a user record."""

    service = get_container().user_service
    result = asyncio.run(service.save_user(UserId(user_id), email, user_type, confirmed))
    typer.echo(result)


@app.command("change-email")
def change_email(user_id: int, new_email: str) -> None:
    """Change a user's email, reclassifying them against the company domain."""

    service = get_container().user_service
    try:
        result = asyncio.run(service.change_email(UserId(user_id), new_email))
    except NotFoundError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc
    except PreconditionError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=2) from exc

    typer.echo(result)
    if result != OK:
        raise typer.Exit(code=1)


@app.command("show-user")
def show_user(user_id: int) -> None:
    """Display a stored user."""

    container = get_container()

    async def _run() -> User | None:
        async with container.unit_of_work_factory() as uow:
            return await uow.user_repository.get_user_by_id(UserId(user_id))

    user = asyncio.run(_run())
    if user is None:
        typer.echo(f"User {user_id} not found")
        raise typer.Exit(code=1)
    typer.echo(f"User:\t{user.user_id}")
    typer.echo(f"Email:\t{user.email}")
    typer.echo(f"Type:\t{user.user_type.value}")
    typer.echo(f"Confirmed:\t{user.is_email_confirmed}")


@app.command("show-company")
def show_company() -> None:
    """Display the registered company."""

    container = get_container()

    async def _run() -> Company | None:
        async with container.unit_of_work_factory() as uow:
            return await uow.company_repository.get_company()

    company = asyncio.run(_run())
    if company is None:
        typer.echo("No company registered")
        raise typer.Exit(code=1)
    typer.echo(f"Domain:\t{company.domain_name}")
    typer.echo(f"Employees:\t{company.number_of_employees}")

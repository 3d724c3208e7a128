"""User use cases: create a user and change a user's email."""

from __future__ import annotations

import logging
from collections.abc import Callable

from crm_core.domain import User, UserType
from crm_core.domain.types import UserId
from crm_core.persistence import UnitOfWork

from .dispatcher import EventDispatcher
from .exceptions import CompanyNotFoundError, UserNotFoundError

UnitOfWorkFactory = Callable[[], UnitOfWork]
DispatcherFactory = Callable[[UnitOfWork], EventDispatcher]

OK = "OK"


class UserService:
    """Runs each use case inside a single unit of work.

    Outcomes are reported only through the return value: ``"OK"`` or the
    business reason the change was refused. Invariant violations and
    collaborator failures propagate and roll the unit of work back.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        dispatcher_factory: DispatcherFactory,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._dispatcher_factory = dispatcher_factory
        self._logger = logger or logging.getLogger(__name__)

    async def save_user(
        self,
        user_id: UserId,
        email: str,
        user_type: UserType,
        is_email_confirmed: bool,
    ) -> str:
        user = User(
            user_id=user_id,
            email=email,
            user_type=user_type,
            is_email_confirmed=is_email_confirmed,
        )
        change = user.save()
        async with self._uow_factory() as uow:
            await self._dispatcher_factory(uow).dispatch(change.events)
            await uow.commit()
        self._logger.info("Saved user %s as %s", user_id, user_type)
        return OK

    async def change_email(self, user_id: UserId, new_email: str) -> str:
        async with self._uow_factory() as uow:
            user = await uow.user_repository.get_user_by_id(user_id)
            if user is None:
                msg = f"User {user_id} not found"
                raise UserNotFoundError(msg)

            reason = user.can_change_email()
            if reason is not None:
                self._logger.info("Rejected email change for user %s: %s", user_id, reason)
                return reason

            company = await uow.company_repository.get_company()
            if company is None:
                raise CompanyNotFoundError("No company has been registered")

            change = user.change_email(new_email, company)
            if change.company is not None:
                await uow.company_repository.save_company(change.company)
            await uow.user_repository.save_user(change.user)
            await self._dispatcher_factory(uow).dispatch(change.events)
            await uow.commit()

        self._logger.info(
            "Changed email for user %s (%d events dispatched)", user_id, len(change.events)
        )
        return OK


__all__ = ["OK", "DispatcherFactory", "UnitOfWorkFactory", "UserService"]

"""User aggregate and the business rules for changing its email."""

from __future__ import annotations

from .base import DomainModel
from .company import Company
from .enums import UserType
from .events import EmailChanged, Event, UserSaved, UserTypeChanged
from .exceptions import require
from .types import UserId

EMAIL_CONFIRMED_REASON = "Can't change email after it's confirmed"


class User(DomainModel):
    """A customer or employee record.

    Transitions never mutate the instance. They return a :class:`UserChange`
    carrying the new state and the events the transition produced, in order.
    """

    user_id: UserId
    email: str
    user_type: UserType
    is_email_confirmed: bool = False

    def save(self) -> UserChange:
        return UserChange(user=self, events=(UserSaved(user=self),))

    def can_change_email(self) -> str | None:
        if self.is_email_confirmed:
            return EMAIL_CONFIRMED_REASON
        return None

    def change_email(self, new_email: str, company: Company) -> UserChange:
        require(
            self.can_change_email() is None,
            f"User {self.user_id} has a confirmed email and cannot change it",
        )

        if self.email == new_email:
            return UserChange(user=self, company=company)

        new_type = (
            UserType.EMPLOYEE if company.is_email_corporate(new_email) else UserType.CUSTOMER
        )

        events: list[Event] = []
        if self.user_type != new_type:
            delta = 1 if new_type is UserType.EMPLOYEE else -1
            company = company.change_number_of_employees(delta)
            events.append(
                UserTypeChanged(user_id=self.user_id, old_type=self.user_type, new_type=new_type)
            )

        user = self.model_copy(update={"email": new_email, "user_type": new_type})
        events.append(EmailChanged(user_id=self.user_id, new_email=new_email))
        return UserChange(user=user, company=company, events=tuple(events))


class UserChange(DomainModel):
    """Outcome of a user transition: resulting state plus ordered events."""

    user: User
    company: Company | None = None
    events: tuple[Event, ...] = ()


UserSaved.model_rebuild()

__all__ = ["EMAIL_CONFIRMED_REASON", "User", "UserChange"]

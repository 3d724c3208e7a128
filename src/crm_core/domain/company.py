"""Company aggregate."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .base import DomainModel
from .exceptions import MalformedEmailError, require
from .types import DomainName


def email_domain(email: str) -> str:
    """Return the lower-cased domain part of ``email``.

    Addresses must contain exactly one ``@``; anything else is rejected
    instead of guessed at.
    """

    if email.count("@") != 1:
        msg = f"Malformed email address: {email!r}"
        raise MalformedEmailError(msg)
    _, domain = email.split("@")
    return domain.lower()


class Company(DomainModel):
    """The single company users may be employed by."""

    domain_name: Annotated[DomainName, Field(min_length=1)]
    number_of_employees: Annotated[int, Field(ge=0)] = 0

    def change_number_of_employees(self, delta: int) -> Company:
        require(
            self.number_of_employees + delta >= 0,
            f"Company {self.domain_name} cannot have {self.number_of_employees + delta} employees",
        )
        return self.model_copy(
            update={"number_of_employees": self.number_of_employees + delta}
        )

    def is_email_corporate(self, email: str) -> bool:
        return email_domain(email) == self.domain_name.lower()


__all__ = ["Company", "email_domain"]

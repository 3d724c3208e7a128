"""Domain events produced by user transitions.

Events form a closed set of variants, each tagged by a literal ``kind``.
Equality is value based and compares only the fields declared on the
variant itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from .base import DomainModel
from .enums import UserType
from .types import UserId

if TYPE_CHECKING:
    from .user import User


class Event(DomainModel):
    """Base record for everything the dispatcher may receive."""

    kind: str


class UserSaved(Event):
    """A newly constructed user is ready for first-time persistence."""

    kind: Literal["user_saved"] = "user_saved"
    user: User


class EmailChanged(Event):
    kind: Literal["email_changed"] = "email_changed"
    user_id: UserId
    new_email: str


class UserTypeChanged(Event):
    kind: Literal["user_type_changed"] = "user_type_changed"
    user_id: UserId
    old_type: UserType
    new_type: UserType


DomainEvent = UserSaved | EmailChanged | UserTypeChanged

__all__ = ["DomainEvent", "EmailChanged", "Event", "UserSaved", "UserTypeChanged"]

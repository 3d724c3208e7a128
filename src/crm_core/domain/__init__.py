"""Domain models for the CRM core."""

from .base import DomainModel
from .company import Company, email_domain
from .enums import UserType
from .events import DomainEvent, EmailChanged, Event, UserSaved, UserTypeChanged
from .exceptions import DomainError, MalformedEmailError, PreconditionError
from .types import DomainName, UserId
from .user import EMAIL_CONFIRMED_REASON, User, UserChange

__all__ = [
    "EMAIL_CONFIRMED_REASON",
    "Company",
    "DomainError",
    "DomainEvent",
    "DomainModel",
    "DomainName",
    "EmailChanged",
    "Event",
    "MalformedEmailError",
    "PreconditionError",
    "User",
    "UserChange",
    "UserId",
    "UserSaved",
    "UserType",
    "UserTypeChanged",
    "email_domain",
]

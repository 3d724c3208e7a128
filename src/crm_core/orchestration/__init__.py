"""Orchestration layer exports."""

from .dispatcher import EventDispatcher
from .exceptions import CompanyNotFoundError, UserNotFoundError
from .user_service import OK, DispatcherFactory, UnitOfWorkFactory, UserService

__all__ = [
    "OK",
    "CompanyNotFoundError",
    "DispatcherFactory",
    "EventDispatcher",
    "UnitOfWorkFactory",
    "UserNotFoundError",
    "UserService",
]

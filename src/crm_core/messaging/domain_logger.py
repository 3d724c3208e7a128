"""Audit logging for user classification changes."""

from __future__ import annotations

import logging
from typing import Protocol

from crm_core.domain import UserType
from crm_core.domain.types import UserId


class DomainLoggerProtocol(Protocol):
    def user_type_has_changed(
        self, user_id: UserId, old_type: UserType, new_type: UserType
    ) -> None: ...


class DomainLogger(DomainLoggerProtocol):
    """Writes domain facts to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("crm_core.audit")

    def user_type_has_changed(
        self, user_id: UserId, old_type: UserType, new_type: UserType
    ) -> None:
        self._logger.info("User %s changed type from %s to %s", user_id, old_type, new_type)


__all__ = ["DomainLogger", "DomainLoggerProtocol"]

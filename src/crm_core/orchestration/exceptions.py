"""Exceptions for use-case orchestration."""

from __future__ import annotations

from crm_core.persistence import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a use case targets a user that does not exist."""


class CompanyNotFoundError(NotFoundError):
    """Raised when the company record has not been created yet."""

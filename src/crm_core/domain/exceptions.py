"""Exceptions raised by domain entities."""

from __future__ import annotations


class DomainError(RuntimeError):
    """Base class for unrecoverable domain errors."""


class PreconditionError(DomainError):
    """Raised when an operation is invoked in violation of its precondition."""


class MalformedEmailError(PreconditionError):
    """Raised when an email address does not contain exactly one ``@``."""


def require(condition: bool, message: str) -> None:
    if not condition:
        raise PreconditionError(message)


__all__ = ["DomainError", "MalformedEmailError", "PreconditionError", "require"]

"""Persistence layer exports."""

from .errors import (
    ConcurrencyError,
    MultipleCompaniesError,
    NotFoundError,
    RepositoryError,
)
from .interfaces import CompanyRepository, UnitOfWork, UserRepository
from .memory import InMemoryCompanyRepository, InMemoryUnitOfWork, InMemoryUserRepository

__all__ = [
    "CompanyRepository",
    "ConcurrencyError",
    "InMemoryCompanyRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "MultipleCompaniesError",
    "NotFoundError",
    "RepositoryError",
    "UnitOfWork",
    "UserRepository",
]

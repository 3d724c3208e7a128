"""Enumerations used across the CRM domain layer."""

from __future__ import annotations

from enum import StrEnum


class UserType(StrEnum):
    """Classification of a user relative to the company."""

    CUSTOMER = "customer"
    EMPLOYEE = "employee"

"""Shared type aliases for the domain layer."""

from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", int)
DomainName = NewType("DomainName", str)

__all__ = ["DomainName", "UserId"]

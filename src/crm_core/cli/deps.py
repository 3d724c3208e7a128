"""Shared CLI dependency helpers."""

from __future__ import annotations

from functools import lru_cache

from crm_core.config import AppSettings
from crm_core.container import ServiceContainer, build_container


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """Return a cached service container for CLI commands."""

    settings = AppSettings.from_env()
    return build_container(settings)


def reset_container() -> None:
    """Drop the cached container so the next command re-reads CRM_* settings."""

    get_container.cache_clear()

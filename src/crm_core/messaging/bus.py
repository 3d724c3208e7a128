"""Message bus adapters used by the event dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from crm_core.domain import User
from crm_core.domain.types import UserId
from crm_core.persistence import UserRepository

logger = logging.getLogger(__name__)


class Bus(Protocol):
    """Transport that accepts fully rendered messages."""

    def send(self, message: str) -> None: ...


@dataclass
class InMemoryBus(Bus):
    """Collects sent messages; used by tests and the local container."""

    sent: list[str] = field(default_factory=list)

    def send(self, message: str) -> None:
        logger.debug("Bus message: %s", message)
        self.sent.append(message)


def render_email_changed(user_id: UserId, new_email: str) -> str:
    return f"Type: USER EMAIL CHANGED; Id: {user_id}; NewEmail: {new_email}"


class MessageBus:
    """Outbound commands and notifications triggered by domain events."""

    def __init__(self, bus: Bus, user_repository: UserRepository) -> None:
        self._bus = bus
        self._user_repository = user_repository

    async def send_email_changed_message(self, user_id: UserId, new_email: str) -> None:
        self._bus.send(render_email_changed(user_id, new_email))

    async def save_user_command(self, user: User) -> None:
        await self._user_repository.save_user(user)


__all__ = ["Bus", "InMemoryBus", "MessageBus", "render_email_changed"]

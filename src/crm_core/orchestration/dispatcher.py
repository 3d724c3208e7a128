"""Routes domain events to the collaborators that act on them."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from crm_core.domain import EmailChanged, Event, UserSaved, UserTypeChanged
from crm_core.messaging import DomainLoggerProtocol, MessageBus

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Stateless router from event variant to collaborator call.

    Events are handled one at a time in the order given. Variants without a
    route are skipped so that new events can be introduced before any
    collaborator handles them.
    """

    def __init__(self, message_bus: MessageBus, domain_logger: DomainLoggerProtocol) -> None:
        self._message_bus = message_bus
        self._domain_logger = domain_logger

    async def dispatch(self, events: Iterable[Event]) -> None:
        for event in events:
            await self._dispatch_one(event)

    async def _dispatch_one(self, event: Event) -> None:
        match event:
            case UserSaved(user=user):
                await self._message_bus.save_user_command(user)
            case EmailChanged(user_id=user_id, new_email=new_email):
                await self._message_bus.send_email_changed_message(user_id, new_email)
            case UserTypeChanged(user_id=user_id, old_type=old_type, new_type=new_type):
                self._domain_logger.user_type_has_changed(user_id, old_type, new_type)
            case _:
                logger.debug("No route for event kind %s; skipping", event.kind)


__all__ = ["EventDispatcher"]

"""Messaging and audit collaborators."""

from .bus import Bus, InMemoryBus, MessageBus, render_email_changed
from .domain_logger import DomainLogger, DomainLoggerProtocol

__all__ = [
    "Bus",
    "DomainLogger",
    "DomainLoggerProtocol",
    "InMemoryBus",
    "MessageBus",
    "render_email_changed",
]

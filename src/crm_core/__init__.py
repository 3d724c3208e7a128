"""CRM core: users, the company they may work for, and their domain events."""

__version__ = "0.1.0"

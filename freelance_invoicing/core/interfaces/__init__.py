"""Core interfaces (ports) for dependency injection."""

from freelance_invoicing.core.interfaces.storage import IReminderStore, ReminderFilters

__all__ = [
    "IReminderStore",
    "ReminderFilters",
]

"""Core domain entities."""

from freelance_invoicing.core.entities.reminder import (
    UPDATABLE_FIELDS,
    InvoiceContext,
    Reminder,
    ReminderStatus,
    ReminderType,
)

__all__ = [
    "UPDATABLE_FIELDS",
    "InvoiceContext",
    "Reminder",
    "ReminderStatus",
    "ReminderType",
]

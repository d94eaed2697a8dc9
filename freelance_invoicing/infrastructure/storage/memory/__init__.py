"""In-memory storage implementations."""

from freelance_invoicing.infrastructure.storage.memory.reminder_store import (
    InMemoryReminderStore,
    build_seed_reminders,
    matches_filters,
)

__all__ = [
    "InMemoryReminderStore",
    "build_seed_reminders",
    "matches_filters",
]

"""Storage infrastructure implementations."""

from freelance_invoicing.infrastructure.storage.memory import InMemoryReminderStore
from freelance_invoicing.infrastructure.storage.sqlite import (
    SQLiteReminderStore,
    close_pool,
    get_connection,
    get_pool,
    get_reminder_store,
    get_transaction,
)

__all__ = [
    # Reminder stores
    "InMemoryReminderStore",
    "SQLiteReminderStore",
    "get_reminder_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]

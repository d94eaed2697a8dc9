"""
Dependency injection container for FastAPI.

Picks the reminder store for each request: the application-owned in-memory
store when USE_MOCK_DB is set, the SQLite store otherwise.
"""

from fastapi import Depends, Request

from freelance_invoicing.application.reminder_service import ReminderService
from freelance_invoicing.config import is_mock_mode
from freelance_invoicing.core.interfaces import IReminderStore
from freelance_invoicing.infrastructure.storage.memory import InMemoryReminderStore
from freelance_invoicing.infrastructure.storage.sqlite import get_reminder_store


def get_mock_store(request: Request) -> InMemoryReminderStore:
    """
    Get the in-memory store owned by this application.

    The lifespan creates it; clients that skip the lifespan (ASGI transport
    in tests) get one created on first use.
    """
    store = getattr(request.app.state, "mock_reminder_store", None)
    if store is None:
        store = InMemoryReminderStore()
        request.app.state.mock_reminder_store = store
    return store


def get_rem_store(request: Request) -> IReminderStore:
    """Get the reminder store for the current storage mode."""
    if is_mock_mode():
        return get_mock_store(request)
    return get_reminder_store()


def get_reminder_service(
    store: IReminderStore = Depends(get_rem_store),
) -> ReminderService:
    """Get a reminder service bound to the active store."""
    return ReminderService(store)

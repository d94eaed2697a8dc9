"""
Abstract interfaces for storage providers.

Both the in-memory store and the SQLite store implement IReminderStore, so
the reminder service and its tests run unchanged against either one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from freelance_invoicing.core.entities.reminder import Reminder


@dataclass(frozen=True)
class ReminderFilters:
    """Filter and pagination options for listing reminders."""

    invoice_status: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    limit: int | None = None
    offset: int = 0


class IReminderStore(ABC):
    """
    Abstract interface for reminder storage.

    Returned reminders carry the joined invoice context when the store can
    provide it.
    """

    @abstractmethod
    async def create(self, reminder: Reminder) -> Reminder:
        """Persist a new reminder. The caller assigns reminder_id."""
        pass

    @abstractmethod
    async def get(self, reminder_id: UUID) -> Reminder | None:
        """Get reminder by ID."""
        pass

    @abstractmethod
    async def update(self, reminder_id: UUID, patch: dict[str, Any]) -> Reminder | None:
        """
        Apply allow-listed field changes.

        Returns None when the reminder is not updatable here.
        """
        pass

    @abstractmethod
    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a reminder. Returns False when nothing matched."""
        pass

    @abstractmethod
    async def list_reminders(self, filters: ReminderFilters) -> list[Reminder]:
        """List reminders ordered and sliced per the filters."""
        pass

"""
In-memory implementation of reminder storage.

Used when USE_MOCK_DB is set, so the API works without a database. Records
live only as long as the owning application.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from freelance_invoicing.config import get_logger
from freelance_invoicing.core.entities.reminder import (
    InvoiceContext,
    Reminder,
    ReminderStatus,
    ReminderType,
)
from freelance_invoicing.core.identifiers import UuidRef
from freelance_invoicing.core.interfaces.storage import IReminderStore, ReminderFilters

logger = get_logger(__name__)


def build_seed_reminders() -> tuple[Reminder, ...]:
    """Fixture reminders always visible in mock listings."""
    return (
        Reminder(
            reminder_id=uuid4(),
            invoice_id=UuidRef(uuid4()),
            client_name="Acme Corp",
            email="accounts@acme.example",
            reminder_date=datetime(2025, 10, 20, 9, 0, tzinfo=UTC),
            message="Website design - final payment",
            type=ReminderType.POLITE,
            status=ReminderStatus.PENDING,
            context=InvoiceContext(
                amount=1500.0,
                invoice_status="unpaid",
                invoice_description="Website design - final payment",
                client_id=str(uuid4()),
                company_name="Acme Corporation",
                client_email="accounts@acme.example",
                phone="+1-555-0100",
            ),
        ),
        Reminder(
            reminder_id=uuid4(),
            invoice_id=UuidRef(uuid4()),
            client_name="Beta LLC",
            email="billing@beta.example",
            reminder_date=datetime(2025, 10, 25, 10, 0, tzinfo=UTC),
            message="Monthly retainer",
            type=ReminderType.FIRM,
            status=ReminderStatus.SENT,
            context=InvoiceContext(
                amount=750.5,
                invoice_status="partial",
                invoice_description="Monthly retainer",
                client_id=str(uuid4()),
                company_name="Beta LLC",
                client_email="billing@beta.example",
                phone="+1-555-0200",
            ),
        ),
    )


def matches_filters(reminder: Reminder, filters: ReminderFilters) -> bool:
    """Apply the list predicates the SQL store expresses as WHERE clauses."""
    if filters.invoice_status is not None:
        invoice_status = reminder.context.invoice_status if reminder.context else None
        if invoice_status != filters.invoice_status:
            return False
    if filters.date_from is not None and reminder.reminder_date < filters.date_from:
        return False
    if filters.date_to is not None and reminder.reminder_date > filters.date_to:
        return False
    return True


class InMemoryReminderStore(IReminderStore):
    """
    Dict-backed reminder store with read-only seed rows.

    Seed rows can be read and listed but not updated; deleting one is a
    no-op that still reports success.
    """

    def __init__(self, seeds: tuple[Reminder, ...] | None = None) -> None:
        self._seeds = build_seed_reminders() if seeds is None else seeds
        self._reminders: dict[UUID, Reminder] = {}

    @property
    def seeds(self) -> tuple[Reminder, ...]:
        return self._seeds

    def _find_seed(self, reminder_id: UUID) -> Reminder | None:
        for seed in self._seeds:
            if seed.reminder_id == reminder_id:
                return seed
        return None

    async def create(self, reminder: Reminder) -> Reminder:
        """Store a new reminder."""
        self._reminders[reminder.reminder_id] = reminder
        logger.info("mock_reminder_created", reminder_id=str(reminder.reminder_id))
        return reminder

    async def get(self, reminder_id: UUID) -> Reminder | None:
        """Get reminder by ID, falling back to the seed rows."""
        found = self._reminders.get(reminder_id)
        if found is not None:
            return found
        return self._find_seed(reminder_id)

    async def update(self, reminder_id: UUID, patch: dict[str, Any]) -> Reminder | None:
        """Merge patch fields over a created reminder."""
        existing = self._reminders.get(reminder_id)
        if existing is None:
            return None
        updated = existing.merged(patch)
        self._reminders[reminder_id] = updated
        logger.info(
            "mock_reminder_updated",
            reminder_id=str(reminder_id),
            fields=sorted(patch),
        )
        return updated

    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a created reminder."""
        if self._reminders.pop(reminder_id, None) is not None:
            logger.info("mock_reminder_deleted", reminder_id=str(reminder_id))
            return True
        return self._find_seed(reminder_id) is not None

    async def list_reminders(self, filters: ReminderFilters) -> list[Reminder]:
        """List seeds then created reminders in insertion order."""
        combined = [*self._seeds, *self._reminders.values()]
        selected = [r for r in combined if matches_filters(r, filters)]
        start = max(filters.offset, 0)
        if filters.limit is None:
            return selected[start:]
        return selected[start : start + filters.limit]

    def close(self) -> None:
        """Drop every created reminder."""
        count = len(self._reminders)
        self._reminders.clear()
        logger.info("mock_reminder_store_closed", discarded=count)

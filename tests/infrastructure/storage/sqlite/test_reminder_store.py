"""Tests for SQLiteReminderStore."""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch
from uuid import uuid4

import aiosqlite
import pytest

import freelance_invoicing.infrastructure.storage.sqlite.connection as conn_module
from freelance_invoicing.core.entities import Reminder, ReminderStatus, ReminderType
from freelance_invoicing.core.exceptions import DatabaseError
from freelance_invoicing.core.identifiers import IntegerRef, UuidRef
from freelance_invoicing.core.interfaces import ReminderFilters
from freelance_invoicing.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore


class TestSQLiteReminderStore:
    """Tests for SQLiteReminderStore."""

    @pytest.fixture(autouse=True)
    def _setup(self, patched_pool: Path):
        """Setup temp database."""
        self.db_path = patched_pool
        self.store = SQLiteReminderStore()

    async def test_create_returns_joined_context(self, sample_reminder: Reminder):
        created = await self.store.create(sample_reminder)

        assert created.reminder_id == sample_reminder.reminder_id
        assert created.invoice_id == IntegerRef(101)
        assert created.reminder_date == sample_reminder.reminder_date
        assert created.context is not None
        assert created.context.amount == 1500.0
        assert created.context.invoice_status == "unpaid"
        assert created.context.company_name == "Acme Corporation"
        assert created.context.client_email == "ap@acme.example"

    async def test_create_stores_text_columns(self, sample_reminder: Reminder):
        await self.store.create(sample_reminder)

        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute(
                "SELECT invoice_id, reminder_date, type, status FROM reminders"
            )
            row = await cursor.fetchone()

        assert row == ("101", "2025-10-20T09:00:00+00:00", "Polite", "pending")

    async def test_get_unknown_invoice_has_no_context(self, sample_reminder: Reminder):
        invoice = UuidRef(uuid4())
        reminder = sample_reminder.model_copy(update={"invoice_id": invoice})
        await self.store.create(reminder)

        fetched = await self.store.get(reminder.reminder_id)

        assert fetched is not None
        assert fetched.invoice_id == invoice
        assert fetched.context is None

    async def test_get_missing_returns_none(self):
        assert await self.store.get(uuid4()) is None

    async def test_update_merges_patch(self, sample_reminder: Reminder):
        await self.store.create(sample_reminder)

        updated = await self.store.update(
            sample_reminder.reminder_id,
            {"status": ReminderStatus.SENT, "type": ReminderType.FIRM},
        )

        assert updated is not None
        assert updated.status == ReminderStatus.SENT
        assert updated.type == ReminderType.FIRM
        assert updated.message == sample_reminder.message
        assert updated.client_name == sample_reminder.client_name
        assert updated.updated_at > sample_reminder.updated_at

    async def test_update_missing_returns_none(self):
        assert await self.store.update(uuid4(), {"message": "Hello"}) is None

    async def test_delete(self, sample_reminder: Reminder):
        await self.store.create(sample_reminder)

        assert await self.store.delete(sample_reminder.reminder_id) is True
        assert await self.store.get(sample_reminder.reminder_id) is None
        assert await self.store.delete(sample_reminder.reminder_id) is False

    async def test_list_orders_by_reminder_date(self, sample_reminder: Reminder):
        for day in (25, 5, 15):
            await self.store.create(
                sample_reminder.model_copy(
                    update={
                        "reminder_id": uuid4(),
                        "reminder_date": datetime(2025, 10, day, tzinfo=UTC),
                    }
                )
            )

        listed = await self.store.list_reminders(ReminderFilters())

        assert [r.reminder_date.day for r in listed] == [5, 15, 25]

    async def test_list_filters_and_pages(self, sample_reminder: Reminder):
        for day in (5, 15, 25):
            await self.store.create(
                sample_reminder.model_copy(
                    update={
                        "reminder_id": uuid4(),
                        "reminder_date": datetime(2025, 10, day, tzinfo=UTC),
                    }
                )
            )
        await self.store.create(
            sample_reminder.model_copy(
                update={"reminder_id": uuid4(), "invoice_id": IntegerRef(999)}
            )
        )

        unpaid = await self.store.list_reminders(ReminderFilters(invoice_status="unpaid"))
        assert len(unpaid) == 3

        ranged = await self.store.list_reminders(
            ReminderFilters(
                date_from=datetime(2025, 10, 10, tzinfo=UTC),
                date_to=datetime(2025, 10, 20, tzinfo=UTC),
            )
        )
        assert [r.reminder_date.day for r in ranged] == [15]

        page = await self.store.list_reminders(
            ReminderFilters(invoice_status="unpaid", limit=1, offset=1)
        )
        assert [r.reminder_date.day for r in page] == [15]

        tail = await self.store.list_reminders(ReminderFilters(invoice_status="unpaid", offset=2))
        assert [r.reminder_date.day for r in tail] == [25]


async def test_driver_errors_become_database_error(temp_db_path: Path, mock_settings):
    """A database without the schema surfaces as DatabaseError."""
    conn_module._pool = None

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        store = SQLiteReminderStore()
        with pytest.raises(DatabaseError) as exc_info:
            await store.get(uuid4())
        await conn_module.close_pool()

    assert exc_info.value.code == "DATABASE_ERROR"
    assert exc_info.value.details["operation"] == "get_reminder"

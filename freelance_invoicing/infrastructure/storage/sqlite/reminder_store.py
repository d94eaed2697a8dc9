"""
SQLite implementation of reminder storage.

Reads go through the reminders -> invoices -> clients join so each reminder
comes back with its invoice context.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import aiosqlite

from freelance_invoicing.config import get_logger
from freelance_invoicing.core.datetimes import from_storage, to_storage, utcnow
from freelance_invoicing.core.entities.reminder import (
    InvoiceContext,
    Reminder,
    ReminderStatus,
    ReminderType,
)
from freelance_invoicing.core.exceptions import DatabaseError
from freelance_invoicing.core.identifiers import invoice_ref_from_storage
from freelance_invoicing.core.interfaces.storage import IReminderStore, ReminderFilters
from freelance_invoicing.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from freelance_invoicing.infrastructure.storage.sqlite.query_builder import (
    build_get_statement,
    build_select_statement,
    build_update_statement,
)

logger = get_logger(__name__)

_CONTEXT_COLUMNS = (
    "amount",
    "invoice_status",
    "invoice_description",
    "client_id",
    "company_name",
    "client_email",
    "phone",
)


@asynccontextmanager
async def _storage_errors(operation: str) -> AsyncIterator[None]:
    """Log driver failures and re-raise them as DatabaseError."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("reminder_storage_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


class SQLiteReminderStore(IReminderStore):
    """SQLite implementation of reminder storage."""

    async def create(self, reminder: Reminder) -> Reminder:
        """Insert a new reminder and return it with its joined context."""
        async with _storage_errors("create_reminder"), get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO reminders (
                    reminder_id, invoice_id, client_name, email,
                    reminder_date, message, type, status,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(reminder.reminder_id),
                    reminder.invoice_id.to_storage(),
                    reminder.client_name,
                    reminder.email,
                    to_storage(reminder.reminder_date),
                    reminder.message,
                    reminder.type.value,
                    reminder.status.value,
                    to_storage(reminder.created_at),
                    to_storage(reminder.updated_at),
                ),
            )
            created = await self._fetch_one(conn, reminder.reminder_id)

        logger.info(
            "reminder_created",
            reminder_id=str(reminder.reminder_id),
            invoice_id=reminder.invoice_id.to_storage(),
        )
        return created or reminder

    async def get(self, reminder_id: UUID) -> Reminder | None:
        """Get reminder by ID."""
        async with _storage_errors("get_reminder"), get_connection() as conn:
            return await self._fetch_one(conn, reminder_id)

    async def update(self, reminder_id: UUID, patch: dict[str, Any]) -> Reminder | None:
        """Apply the allow-listed patch and return the refreshed row."""
        sql, params = build_update_statement(reminder_id, patch, utcnow())

        async with _storage_errors("update_reminder"), get_transaction() as conn:
            cursor = await conn.execute(sql, params)
            if cursor.rowcount == 0:
                return None
            updated = await self._fetch_one(conn, reminder_id)

        logger.info("reminder_updated", reminder_id=str(reminder_id), fields=sorted(patch))
        return updated

    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a reminder by ID."""
        async with _storage_errors("delete_reminder"), get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM reminders WHERE reminder_id = ?", (str(reminder_id),)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("reminder_deleted", reminder_id=str(reminder_id))
        return deleted

    async def list_reminders(self, filters: ReminderFilters) -> list[Reminder]:
        """List reminders with invoice context, ordered by reminder date."""
        sql, params = build_select_statement(filters)
        async with _storage_errors("list_reminders"), get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    async def _fetch_one(
        self, conn: aiosqlite.Connection, reminder_id: UUID
    ) -> Reminder | None:
        sql, params = build_get_statement(reminder_id)
        cursor = await conn.execute(sql, params)
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_entity(row)

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Reminder:
        """Convert a joined database row to a Reminder entity."""
        context = None
        if row["invoice_status"] is not None or row["client_id"] is not None:
            context = InvoiceContext(**{name: row[name] for name in _CONTEXT_COLUMNS})

        return Reminder(
            reminder_id=UUID(row["reminder_id"]),
            invoice_id=invoice_ref_from_storage(row["invoice_id"]),
            client_name=row["client_name"],
            email=row["email"],
            reminder_date=from_storage(row["reminder_date"]),
            message=row["message"],
            type=ReminderType(row["type"]),
            status=ReminderStatus(row["status"]),
            created_at=from_storage(row["created_at"]),
            updated_at=from_storage(row["updated_at"]),
            context=context,
        )

"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock, patch
from uuid import uuid4

import aiosqlite
import pytest

import freelance_invoicing.infrastructure.storage.sqlite.connection as conn_module
from freelance_invoicing.core.entities import Reminder, ReminderStatus, ReminderType
from freelance_invoicing.core.identifiers import IntegerRef
from freelance_invoicing.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Create a temporary database with the migrated schema and one invoice."""
    await initialize_database(temp_db_path, create_backup_before=False)

    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.execute(
            "INSERT INTO clients (client_id, client_name, email, company_name, phone) "
            "VALUES (?, ?, ?, ?, ?)",
            ("client-1", "Acme", "ap@acme.example", "Acme Corporation", "+1-555-0100"),
        )
        await conn.execute(
            "INSERT INTO invoices (invoice_id, client_id, amount, status, description) "
            "VALUES (?, ?, ?, ?, ?)",
            ("101", "client-1", 1500.0, "unpaid", "Website design"),
        )
        await conn.commit()

    yield temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def patched_pool(initialized_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the temporary database."""
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        conn_module._pool = None
        yield initialized_db
        await conn_module.close_pool()


@pytest.fixture
def sample_reminder() -> Reminder:
    """Reminder for the seeded invoice."""
    return Reminder(
        reminder_id=uuid4(),
        invoice_id=IntegerRef(101),
        client_name="Acme",
        email="ap@acme.example",
        reminder_date=datetime(2025, 10, 20, 9, 0, tzinfo=UTC),
        message="Final payment due",
        type=ReminderType.POLITE,
        status=ReminderStatus.PENDING,
        created_at=datetime(2025, 10, 1, 12, 0, tzinfo=UTC),
        updated_at=datetime(2025, 10, 1, 12, 0, tzinfo=UTC),
    )

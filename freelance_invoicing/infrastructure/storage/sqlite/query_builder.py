"""
Parameterized SQL construction for the reminders table.

Column names only ever come from the fixed tables in this module; request
values are always bound as parameters.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from freelance_invoicing.config import get_settings
from freelance_invoicing.core.datetimes import to_storage
from freelance_invoicing.core.entities.reminder import UPDATABLE_FIELDS
from freelance_invoicing.core.exceptions import NoFieldsToUpdateError
from freelance_invoicing.core.identifiers import InvoiceRef
from freelance_invoicing.core.interfaces.storage import ReminderFilters


def _encode_ref(value: InvoiceRef) -> str:
    return value.to_storage()


def _encode_enum(value: Enum) -> str:
    return value.value


def _encode_text(value: str) -> str:
    return value


def _encode_datetime(value: datetime) -> str:
    return to_storage(value)


_ENCODERS: dict[str, Callable[[Any], Any]] = {
    "invoice_id": _encode_ref,
    "client_name": _encode_text,
    "email": _encode_text,
    "reminder_date": _encode_datetime,
    "message": _encode_text,
    "status": _encode_enum,
    "type": _encode_enum,
}

# Mutable columns in statement order, each with its storage encoder
UPDATABLE_COLUMNS: tuple[tuple[str, Callable[[Any], Any]], ...] = tuple(
    (name, _ENCODERS[name]) for name in UPDATABLE_FIELDS
)

REMINDER_VIEW_SELECT = """
    SELECT
        r.reminder_id,
        r.invoice_id,
        r.client_name,
        r.email,
        r.reminder_date,
        r.message,
        r.type,
        r.status,
        r.created_at,
        r.updated_at,
        i.amount,
        i.status AS invoice_status,
        i.description AS invoice_description,
        c.client_id,
        c.company_name,
        c.email AS client_email,
        c.phone
    FROM reminders r
    LEFT JOIN invoices i ON r.invoice_id = i.invoice_id
    LEFT JOIN clients c ON i.client_id = c.client_id
"""


def build_update_statement(
    reminder_id: UUID,
    patch: dict[str, Any],
    updated_at: datetime,
) -> tuple[str, list[Any]]:
    """
    Build an UPDATE for the allow-listed fields present in the patch.

    Keys outside the allow-list are ignored. The reminder id is always the
    last parameter.

    Raises:
        NoFieldsToUpdateError: if no allow-listed field carries a value
    """
    assignments: list[str] = []
    params: list[Any] = []

    for column, encode in UPDATABLE_COLUMNS:
        value = patch.get(column)
        if value is None:
            continue
        assignments.append(f"{column} = ?")
        params.append(encode(value))

    if not assignments:
        raise NoFieldsToUpdateError()

    assignments.append("updated_at = ?")
    params.append(to_storage(updated_at))
    params.append(str(reminder_id))

    sql = f"UPDATE reminders SET {', '.join(assignments)} WHERE reminder_id = ?"
    return sql, params


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, get_settings().api.max_page_size))


def build_select_statement(filters: ReminderFilters) -> tuple[str, list[Any]]:
    """Build the joined, filtered, ordered and paginated reminder listing."""
    predicates: list[str] = []
    params: list[Any] = []

    if filters.invoice_status is not None:
        predicates.append("i.status = ?")
        params.append(filters.invoice_status)
    if filters.date_from is not None:
        predicates.append("r.reminder_date >= ?")
        params.append(to_storage(filters.date_from))
    if filters.date_to is not None:
        predicates.append("r.reminder_date <= ?")
        params.append(to_storage(filters.date_to))

    sql = REMINDER_VIEW_SELECT
    if predicates:
        sql += f" WHERE {' AND '.join(predicates)}"
    sql += " ORDER BY r.reminder_date ASC"

    offset = max(filters.offset, 0)
    if filters.limit is not None:
        sql += " LIMIT ?"
        params.append(clamp_limit(filters.limit))
    elif offset:
        # SQLite only accepts OFFSET after a LIMIT; -1 means unbounded
        sql += " LIMIT -1"
    if offset:
        sql += " OFFSET ?"
        params.append(offset)

    return sql, params


def build_get_statement(reminder_id: UUID) -> tuple[str, list[Any]]:
    """Build the joined lookup for a single reminder."""
    return f"{REMINDER_VIEW_SELECT} WHERE r.reminder_id = ?", [str(reminder_id)]

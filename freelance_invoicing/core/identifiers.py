"""
Identifier parsing for reminders and invoice references.

Reminder ids are always UUIDs. Invoice references come from several
generations of invoice tables, so a reference is either a positive integer
or a UUID; both are kept as distinct variants so joins never compare an
integer key against a UUID key by accident.
"""

import re
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from freelance_invoicing.core.exceptions import ValidationError

_DIGITS = re.compile(r"[0-9]+")
_CANONICAL_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


@dataclass(frozen=True)
class IntegerRef:
    """Invoice referenced by a numeric key."""

    value: int

    def to_wire(self) -> int:
        return self.value

    def to_storage(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UuidRef:
    """Invoice referenced by a UUID key."""

    value: UUID

    def to_wire(self) -> str:
        return str(self.value)

    def to_storage(self) -> str:
        return str(self.value)


InvoiceRef = IntegerRef | UuidRef


def _parse_uuid(value: str) -> UUID | None:
    # UUID() also takes urn:uuid:, braces and bare hex; only 8-4-4-4-12 is an id
    if not _CANONICAL_UUID.fullmatch(value):
        return None
    return UUID(value)


def parse_invoice_ref(value: Any) -> InvoiceRef:
    """
    Parse an invoice reference.

    Accepts a positive int, a digit-only string, or a UUID string.

    Raises:
        ValueError: if the value has none of the accepted shapes
    """
    if isinstance(value, (IntegerRef, UuidRef)):
        return value

    # bool is an int subclass; True is not an invoice number
    if isinstance(value, int) and not isinstance(value, bool):
        if value > 0:
            return IntegerRef(value)
        raise ValueError("invoice_id must be a positive integer")

    if isinstance(value, str):
        if _DIGITS.fullmatch(value):
            return IntegerRef(int(value))
        parsed = _parse_uuid(value)
        if parsed is not None:
            return UuidRef(parsed)

    raise ValueError("invoice_id is required and must be an integer or UUID")


def is_valid_invoice_ref(value: Any) -> bool:
    """Check whether a value is an acceptable invoice reference."""
    try:
        parse_invoice_ref(value)
    except ValueError:
        return False
    return True


def invoice_ref_from_storage(raw: Any) -> InvoiceRef:
    """Rebuild the tagged reference from a stored column value."""
    return parse_invoice_ref(raw if isinstance(raw, int) else str(raw))


def parse_reminder_id(value: Any, field: str = "id") -> UUID:
    """
    Parse a reminder id strictly as a UUID.

    Raises:
        ValidationError: if the value is not a UUID
    """
    if isinstance(value, UUID):
        return value
    parsed = _parse_uuid(value) if isinstance(value, str) and value else None
    if parsed is None:
        raise ValidationError.for_field(field, "id must be a valid UUID")
    return parsed

"""Payment reminder entity."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from freelance_invoicing.core.datetimes import utcnow
from freelance_invoicing.core.identifiers import InvoiceRef


class ReminderType(str, Enum):
    """Tone of the reminder communication."""

    POLITE = "Polite"
    FIRM = "Firm"
    FINAL = "Final"


class ReminderStatus(str, Enum):
    """Delivery state of a reminder."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    PARTIAL = "partial"


# Fields a partial update may change, in statement order
UPDATABLE_FIELDS: tuple[str, ...] = (
    "invoice_id",
    "client_name",
    "email",
    "reminder_date",
    "message",
    "status",
    "type",
)


class InvoiceContext(BaseModel):
    """
    Read-only invoice and client attributes joined onto a reminder.

    Never written through the reminder endpoints.
    """

    amount: float | None = None
    invoice_status: str | None = None
    invoice_description: str | None = None
    client_id: str | None = None
    company_name: str | None = None
    client_email: str | None = None
    phone: str | None = None


class Reminder(BaseModel):
    """
    Payment reminder tied to one invoice.

    client_name and email are captured when the reminder is created so the
    record stays readable even if the client row changes later.
    """

    reminder_id: UUID = Field(default_factory=uuid4)
    invoice_id: InvoiceRef
    client_name: str
    email: str
    reminder_date: datetime = Field(default_factory=utcnow)
    message: str | None = None
    type: ReminderType = ReminderType.POLITE
    status: ReminderStatus = ReminderStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    context: InvoiceContext | None = None

    def merged(self, patch: dict) -> "Reminder":
        """
        Return a copy with the non-null patch values applied.

        Fields missing from the patch keep their current value.
        """
        changes = {key: value for key, value in patch.items() if value is not None}
        changes["updated_at"] = utcnow()
        return self.model_copy(update=changes)

"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between the reminder service and API layer.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from freelance_invoicing.core.entities.reminder import Reminder


class ReminderResponse(BaseModel):
    """
    Reminder with its read-only invoice and client context.

    Context fields are null when the invoice is unknown to the store.
    """

    reminder_id: UUID
    invoice_id: int | str
    client_name: str
    email: str
    reminder_date: datetime
    message: str | None = None
    type: str
    status: str
    created_at: datetime
    updated_at: datetime

    # Joined invoice/client attributes
    amount: float | None = None
    invoice_status: str | None = None
    invoice_description: str | None = None
    client_id: str | None = None
    company_name: str | None = None
    client_email: str | None = None
    phone: str | None = None

    @classmethod
    def from_entity(cls, reminder: Reminder) -> "ReminderResponse":
        context = reminder.context.model_dump() if reminder.context else {}
        return cls(
            reminder_id=reminder.reminder_id,
            invoice_id=reminder.invoice_id.to_wire(),
            client_name=reminder.client_name,
            email=reminder.email,
            reminder_date=reminder.reminder_date,
            message=reminder.message,
            type=reminder.type.value,
            status=reminder.status.value,
            created_at=reminder.created_at,
            updated_at=reminder.updated_at,
            **context,
        )


class ProviderHealthResponse(BaseModel):
    """Storage backend health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    storage_mode: str | None = None
    database: ProviderHealthResponse | None = None


class FieldErrorResponse(BaseModel):
    """One rejected request field."""

    field: str = Field(..., description="Field name or location")
    message: str = Field(..., description="Why the value was rejected")


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    Validation failures also list every rejected field in errors.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    errors: list[FieldErrorResponse] | None = Field(
        default=None, description="Field-level validation failures"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)

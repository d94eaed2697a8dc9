"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and the reminder service.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)

from freelance_invoicing.core.datetimes import parse_iso8601, truncate
from freelance_invoicing.core.entities.reminder import (
    UPDATABLE_FIELDS,
    ReminderStatus,
    ReminderType,
)
from freelance_invoicing.core.identifiers import InvoiceRef, parse_invoice_ref

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


def _parse_timestamp(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return parse_iso8601(value)
        except ValueError:
            raise ValueError("due_date must be an ISO 8601 date") from None
    return value


class CreateReminderRequest(BaseModel):
    """Request to create a reminder."""

    model_config = ConfigDict(extra="ignore")

    invoice_id: InvoiceRef = Field(
        ...,
        description="Invoice reference: positive integer, digit string or UUID",
        examples=[123, "6f1c2b3e-8d4a-4f5b-9c7d-1e2f3a4b5c6d"],
    )
    client_name: NonEmptyStr = Field(..., description="Client name shown on the reminder")
    email: EmailStr = Field(..., description="Address the reminder is meant for")
    reminder_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "reminder_date"),
        description="When the reminder is due (ISO 8601); defaults to now",
    )
    message: TrimmedStr | None = Field(default=None, description="Free-text note")
    status: ReminderStatus | None = Field(default=None, description="Delivery status")
    type: ReminderType | None = Field(default=None, description="Reminder tone")

    @field_validator("invoice_id", mode="before")
    @classmethod
    def check_invoice_id(cls, v: Any) -> InvoiceRef:
        return parse_invoice_ref(v)

    @field_validator("reminder_date", mode="before")
    @classmethod
    def parse_reminder_date(cls, v: Any) -> Any:
        return _parse_timestamp(v)

    @field_validator("reminder_date")
    @classmethod
    def drop_subseconds(cls, v: datetime | None) -> datetime | None:
        return truncate(v) if v is not None else None


class UpdateReminderRequest(BaseModel):
    """
    Request to update a reminder.

    Every field is optional; unknown keys are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    invoice_id: InvoiceRef | None = Field(default=None, description="Invoice reference")
    client_name: NonEmptyStr | None = Field(default=None, description="Client name")
    email: EmailStr | None = Field(default=None, description="Reminder address")
    reminder_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("due_date", "reminder_date"),
        description="Due date (ISO 8601)",
    )
    message: TrimmedStr | None = Field(default=None, description="Free-text note")
    status: ReminderStatus | None = Field(default=None, description="Delivery status")
    type: ReminderType | None = Field(default=None, description="Reminder tone")

    @field_validator("invoice_id", mode="before")
    @classmethod
    def check_invoice_id(cls, v: Any) -> InvoiceRef | None:
        if v is None:
            return None
        return parse_invoice_ref(v)

    @field_validator("reminder_date", mode="before")
    @classmethod
    def parse_reminder_date(cls, v: Any) -> Any:
        return _parse_timestamp(v)

    @field_validator("reminder_date")
    @classmethod
    def drop_subseconds(cls, v: datetime | None) -> datetime | None:
        return truncate(v) if v is not None else None

    def to_patch(self) -> dict[str, Any]:
        """Allow-listed fields that carry a value, in update order."""
        patch = {}
        for name in UPDATABLE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                patch[name] = value
        return patch

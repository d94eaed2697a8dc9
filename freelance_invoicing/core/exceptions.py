"""
Domain exceptions for the invoicing API.

Every error raised by the service and storage layers derives from
InvoicingError so the API layer can map it to a status code and envelope.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class InvoicingError(Exception):
    """Base exception for all invoicing errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(InvoicingError):
    """
    Input validation failed.

    Carries every violation found, not only the first, so callers can fix
    a request in one round trip.
    """

    def __init__(self, violations: list[FieldViolation], message: str | None = None):
        if not violations:
            raise ValueError("ValidationError requires at least one violation")
        self.violations = list(violations)
        super().__init__(
            message or "; ".join(f"{v.field}: {v.message}" for v in self.violations),
            code="VALIDATION_ERROR",
            details={"errors": [v.to_dict() for v in self.violations]},
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldViolation(field=field, message=message)])


class NoFieldsToUpdateError(ValidationError):
    """Partial update carried no allow-listed field."""

    def __init__(self) -> None:
        super().__init__(
            [FieldViolation(field="body", message="No fields provided for update")],
            message="No fields provided for update",
        )


# Lookup Exceptions
class NotFoundError(InvoicingError):
    """Requested entity does not exist in the active store."""

    pass


class ReminderNotFoundError(NotFoundError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: Any):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": str(reminder_id)},
        )


# Storage Exceptions
class StorageError(InvoicingError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )

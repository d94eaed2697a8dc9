"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from freelance_invoicing.application.dto.requests import (
    CreateReminderRequest,
    UpdateReminderRequest,
)
from freelance_invoicing.application.dto.responses import (
    ErrorResponse,
    FieldErrorResponse,
    HealthResponse,
    ProviderHealthResponse,
    ReminderResponse,
)

__all__ = [
    # Requests
    "CreateReminderRequest",
    "UpdateReminderRequest",
    # Responses
    "ReminderResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    "FieldErrorResponse",
]

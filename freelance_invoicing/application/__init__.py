"""
Application layer - DTOs and the reminder service.

API handlers talk to the reminder service only; the service talks to a
storage implementation chosen by the API layer.
"""

from freelance_invoicing.application.dto.requests import (
    CreateReminderRequest,
    UpdateReminderRequest,
)
from freelance_invoicing.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    ProviderHealthResponse,
    ReminderResponse,
)
from freelance_invoicing.application.reminder_service import ReminderService

__all__ = [
    # Request DTOs
    "CreateReminderRequest",
    "UpdateReminderRequest",
    # Response DTOs
    "ReminderResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    # Services
    "ReminderService",
]

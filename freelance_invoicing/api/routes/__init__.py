"""API route modules."""

from freelance_invoicing.api.routes.health import router as health_router
from freelance_invoicing.api.routes.reminders import router as reminders_router

__all__ = [
    "health_router",
    "reminders_router",
]

"""API middleware."""

from freelance_invoicing.api.middleware.error_handler import ErrorHandlerMiddleware
from freelance_invoicing.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]

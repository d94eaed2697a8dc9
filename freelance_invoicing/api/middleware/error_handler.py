"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- errors: per-field failures, for validation errors only
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from freelance_invoicing.application.dto.responses import ErrorResponse, FieldErrorResponse
from freelance_invoicing.config import get_logger
from freelance_invoicing.core.exceptions import (
    InvoicingError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

GENERIC_SERVER_MESSAGE = "An internal error occurred"

# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "REMINDER_NOT_FOUND": "Check the reminder ID and try GET /api/reminders to list reminders.",
    "VALIDATION_ERROR": "Check the request body and query parameters against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    405: "The HTTP method is not allowed for this path.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _field_errors(exc: Exception) -> list[FieldErrorResponse] | None:
    if not isinstance(exc, ValidationError):
        return None
    return [FieldErrorResponse(field=v.field, message=v.message) for v in exc.violations]


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standard JSON error envelope."""
    status_code = _status_for(exc)

    if isinstance(exc, InvoicingError):
        error_code = exc.code
    else:
        error_code = "INTERNAL_ERROR"

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
        message = GENERIC_SERVER_MESSAGE
    else:
        logger.info(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_code=error_code,
            status=status_code,
        )
        message = str(exc)

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        errors=_field_errors(exc),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escaped the registered handlers to
    standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def _field_name(loc: tuple[Any, ...]) -> str:
    """Turn a pydantic error location into a client-facing field name."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:] or parts
    return ".".join(parts)


def _clean_message(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def request_validation_violations(exc: RequestValidationError) -> list[FieldErrorResponse]:
    """Flatten FastAPI request validation errors into field/message pairs."""
    return [
        FieldErrorResponse(
            field=_field_name(tuple(error["loc"])),
            message=_clean_message(error["msg"]),
        )
        for error in exc.errors()
    ]


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""

    @app.exception_handler(InvoicingError)
    async def invoicing_exception_handler(
        request: Request,
        exc: InvoicingError,
    ) -> JSONResponse:
        """Handle domain errors raised by the service and storage layers."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = request_validation_violations(exc)

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=_get_hint("VALIDATION_ERROR", 400),
                detail="; ".join(f"{e.field}: {e.message}" for e in errors),
                errors=errors,
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 400:
        return "BAD_REQUEST"
    return "HTTP_ERROR"

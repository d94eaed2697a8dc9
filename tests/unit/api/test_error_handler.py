"""Tests for error envelope helpers."""

from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from freelance_invoicing.api.middleware import ErrorHandlerMiddleware
from freelance_invoicing.api.middleware.error_handler import (
    EXCEPTION_STATUS_MAP,
    _field_name,
    setup_exception_handlers,
)
from freelance_invoicing.core.exceptions import (
    NotFoundError,
    ReminderNotFoundError,
    StorageError,
    ValidationError,
)


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(ErrorHandlerMiddleware)
    setup_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("connection string with password")

    @app.get("/missing")
    async def missing():
        raise ReminderNotFoundError("abc")

    @app.get("/paged")
    async def paged(limit: int = Query(ge=1)):
        return {"limit": limit}

    return app


def test_status_map():
    assert EXCEPTION_STATUS_MAP[ValidationError] == 400
    assert EXCEPTION_STATUS_MAP[NotFoundError] == 404
    assert EXCEPTION_STATUS_MAP[StorageError] == 500


def test_field_name_drops_location_prefix():
    assert _field_name(("body", "email")) == "email"
    assert _field_name(("query", "limit")) == "limit"
    assert _field_name(("body",)) == "body"
    assert _field_name(("body", "items", 0)) == "items.0"


def test_unexpected_error_is_generic_500():
    client = TestClient(_app(), raise_server_exceptions=False)

    response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "INTERNAL_ERROR"
    assert body["message"] == "An internal error occurred"
    assert "password" not in response.text


def test_domain_not_found():
    client = TestClient(_app())

    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error_code"] == "REMINDER_NOT_FOUND"
    assert response.json()["path"] == "/missing"


def test_request_validation_is_400():
    client = TestClient(_app())

    response = client.get("/paged?limit=0")

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == "limit"

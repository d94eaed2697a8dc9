"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator, Generator

# Keep settings away from the working tree before the app module is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_DATA_DIR", tempfile.mkdtemp(prefix="invoicing-tests-"))

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from freelance_invoicing.api.main import create_app  # noqa: E402


@pytest.fixture
def mock_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Route reminder requests to the in-memory store."""
    monkeypatch.setenv("USE_MOCK_DB", "true")


@pytest.fixture
def app() -> FastAPI:
    """Fresh application, so each test gets its own in-memory store."""
    return create_app()


@pytest.fixture
def client(app: FastAPI, mock_mode: None) -> Generator[TestClient, None, None]:
    """Create sync test client (runs the lifespan)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client(app: FastAPI, mock_mode: None) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client in mock mode."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def reminder_payload() -> dict:
    """Minimal valid create request."""
    return {
        "invoice_id": "6f1c2b3e-8d4a-4f5b-9c7d-1e2f3a4b5c6d",
        "client_name": "Acme",
        "email": "a@b.com",
    }

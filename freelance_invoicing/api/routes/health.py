"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from freelance_invoicing import __version__
from freelance_invoicing.application.dto.responses import HealthResponse, ProviderHealthResponse
from freelance_invoicing.config import is_mock_mode

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _storage_mode() -> str:
    return "mock" if is_mock_mode() else "sqlite"


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the storage mode in effect.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        storage_mode=_storage_mode(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time. The database is not
    touched in mock mode.
    """
    from freelance_invoicing.infrastructure.storage.sqlite import get_connection_pool

    if is_mock_mode():
        return HealthResponse(
            status="healthy",
            version=__version__,
            uptime_seconds=time.time() - _start_time,
            storage_mode="mock",
            database=ProviderHealthResponse(name="mock", available=True),
        )

    try:
        pool = await get_connection_pool()
        latency = await pool.ping()
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
        )

    except Exception as e:
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        storage_mode="sqlite",
        database=db_status,
    )

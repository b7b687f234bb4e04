"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Request

from src.application.dto.responses import ComponentHealthResponse, HealthResponse
from src.config import get_settings
from src.core.exceptions import StorageError

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health(request: Request) -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    db_status = ComponentHealthResponse(name="sqlite", available=False)

    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        db_status.error = "connection pool not initialized"
    else:
        try:
            start = time.time()
            async with pool.acquire() as conn:
                await conn.execute("SELECT 1")
            db_status = ComponentHealthResponse(
                name="sqlite",
                available=True,
                latency_ms=(time.time() - start) * 1000,
            )
        except StorageError as e:
            db_status.error = e.message

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )

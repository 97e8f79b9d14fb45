"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends

from prodline.api.dependencies import get_app_settings
from prodline.application.dto.responses import HealthResponse
from prodline.config import Settings, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(
        status="healthy",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Database health check.

    Runs a trivial query through the connection pool.
    """
    import aiosqlite

    from prodline.core.exceptions import StorageError
    from prodline.infrastructure.storage.sqlite import get_connection

    database = "available"
    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except (aiosqlite.Error, StorageError) as e:
        logger.warning("database_health_failed", error=str(e))
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "available" else "unhealthy",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        database=database,
    )

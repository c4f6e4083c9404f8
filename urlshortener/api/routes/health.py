"""Health check endpoints for monitoring application status."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from urlshortener.api import schemas
from urlshortener.api.dependencies import get_health_check, get_settings
from urlshortener.core.config import Settings
from urlshortener.db.base import DatabaseHealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=schemas.HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(
    settings: Settings = Depends(get_settings),
    db_health: DatabaseHealthCheck = Depends(get_health_check),
):
    """Check health of all system components."""
    database = await db_health.check_connection()

    return schemas.HealthResponse(
        status="healthy" if database["status"] == "healthy" else "degraded",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT.value,
        timestamp=datetime.now(timezone.utc),
        components={"database": schemas.ComponentHealth(**database)},
    )


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    response_description="Application readiness status"
)
async def readiness_check(
    response: Response,
    db_health: DatabaseHealthCheck = Depends(get_health_check),
):
    """Check if application is ready to handle requests."""
    database = await db_health.check_connection()
    components_status = {"api": True, "database": database["status"] == "healthy"}
    is_ready = all(components_status.values())

    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "ready": is_ready,
        "components": components_status,
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
    response_description="Application liveness status"
)
async def liveness_check():
    """Check if application is running."""
    return {"alive": True}

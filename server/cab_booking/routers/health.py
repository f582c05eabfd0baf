"""Health check router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import ping_db
from ..core.dependencies import DB_DEPENDENCY
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import HealthResponse, HealthStatus, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check if the service is healthy and responsive",
)
async def health_check() -> HealthResponse:
    """Liveness: the process is up and serving requests."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness Check",
    description="Check if the service can reach its database",
)
async def readiness_check(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """
    Readiness: the database answers.

    Returns 503 with ``degraded`` status when it does not.
    """
    try:
        database_ok = await ping_db(db)
    except Exception as e:
        logger.warning("Readiness database check failed", extra={"error": str(e)})
        database_ok = False

    response_data = ReadinessResponse(
        status=HealthStatus.READY if database_ok else HealthStatus.DEGRADED,
        service=SERVICE_NAME,
        checks={"database": "ok" if database_ok else "unavailable"},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response_data.model_dump(mode="json"),
    )


@router.get(
    "/info",
    tags=["Info"],
    summary="Service Information",
    description="Get detailed information about the service",
    response_model=dict,
)
async def service_info():
    """Service name, version and the endpoints it exposes."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Contact intake and cab booking API for the ZingCab site",
        "environment": settings.environment,
        "debug": settings.debug,
        "features": {
            "fare_source": settings.fare_source,
            "problem_details": True,
            "tracing": bool(settings.otlp_endpoint),
        },
        "endpoints": {
            "contact": "/api/contact",
            "estimate": "/api/booking/estimate",
            "submit": "/api/booking/submit",
            "cars": "/api/cars",
            "routes": "/api/routes",
            "health": "/health",
            "readiness": "/ready",
            "metrics": "/metrics",
            "docs": "/docs" if settings.debug else None,
        },
    }

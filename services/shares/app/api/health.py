"""
Health check endpoints for share service.

Provides service health status and provider readiness.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from services.shares.app.core.config import ShareServiceSettings, get_settings
from services.shares.app.core.dependencies import get_share_provider
from services.shares.app.providers.base import ShareProvider

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status response model."""

    status: str = Field(..., description="Service status (healthy/unhealthy)")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    provider: str = Field(..., description="Active storage provider")
    timestamp: datetime = Field(..., description="Check timestamp")


@router.get(
    "/health",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check(
    settings: Annotated[ShareServiceSettings, Depends(get_settings)],
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> HealthStatus:
    """
    Basic health check endpoint.

    Reports unhealthy when the active provider lacks credentials.
    """
    return HealthStatus(
        status="healthy" if provider.is_configured() else "unhealthy",
        service=settings.service_name,
        version=settings.service_version,
        provider=provider.name,
        timestamp=datetime.now(UTC),
    )


@router.get("/health/ready", status_code=status.HTTP_200_OK, summary="Readiness check")
async def readiness_check(
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> dict[str, str]:
    """
    Readiness check for container orchestration.

    Raises:
        HTTPException: If the storage provider is not configured
    """
    if not provider.is_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service not ready: {provider.name} provider is not configured",
        )
    return {"status": "ready"}


@router.get("/health/live", status_code=status.HTTP_200_OK, summary="Liveness check")
async def liveness_check() -> dict[str, str]:
    """Liveness check: the process is up."""
    return {"status": "alive"}

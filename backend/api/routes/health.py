"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings

from ..dependencies import ServiceContainer, get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    session: str


@router.get("/health", response_model=HealthResponse)
async def health_check(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    settings: Settings = container.settings
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(container: ServiceContainer = Depends(get_container)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Sessions are only restored once startup has finished; until then
    every session reports "checking".
    """
    if not container.started:
        return ReadinessResponse(status="starting", session="checking")
    return ReadinessResponse(status="ready", session="ready")

"""
Health check router.

Provides a simple liveness endpoint. It does not touch the database, so a
down record store never fails the probe.
"""

from fastapi import APIRouter

from app.core.config import settings
from app.interfaces.dashboard.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)

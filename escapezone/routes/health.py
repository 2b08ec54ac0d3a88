"""
Health check route for the Escape Zone backend.

This endpoint is PUBLIC and provides a simple status check for load
balancers, monitoring, and deployment verification.
"""

import logging

from fastapi import APIRouter

from escapezone.config import settings
from escapezone.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
    tags=["system"],
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "gemini_configured": true
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", gemini_configured=bool(settings.GOOGLE_API_KEY))

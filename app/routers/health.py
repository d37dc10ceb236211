"""
Health Check Router
Simple health check endpoint
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.utils.forecast import STRATEGIES

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status and the forecast models the engine can run.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "forecast_models": sorted(STRATEGIES),
        "default_forecast_model": settings.FORECAST_MODEL,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

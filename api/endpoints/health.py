"""
Recipe Book Health Check Endpoints
"""

from fastapi import APIRouter, HTTPException, status
import asyncio
import time

from core.database import DatabaseHealthCheck
from core.config import settings

router = APIRouter()


@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": time.time()
    }


@router.get("/live")
async def liveness_check():
    """Liveness probe endpoint"""
    return {"status": "alive"}


@router.get("/ready")
async def readiness_check():
    """
    Readiness probe endpoint
    Checks the database connection
    """
    try:
        db_healthy = await asyncio.wait_for(DatabaseHealthCheck.check_connection(), timeout=5.0)
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "error": "Health check timeout"}
        )

    if not db_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "database": "disconnected"}
        )

    return {
        "status": "ready",
        "database": "connected",
        "extraction": "configured" if settings.GEMINI_API_KEY else "disabled",
        "timestamp": time.time()
    }


@router.get("/detailed")
async def detailed_health_check():
    """
    Detailed health check with connection information
    Only available in development environment
    """
    if not settings.is_development:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Endpoint not available in production"
        )

    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "components": {
            "database": await DatabaseHealthCheck.get_connection_info(),
            "extraction": {
                "model": settings.GEMINI_MODEL,
                "configured": bool(settings.GEMINI_API_KEY),
            },
        },
    }

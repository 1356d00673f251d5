"""
Recipe Book API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter
import structlog

from api.endpoints import categories, favorites, health, recipes, stats

logger = structlog.get_logger()

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

api_router.include_router(
    recipes.router,
    prefix="/recipes",
    tags=["recipes"]
)

api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)

api_router.include_router(
    favorites.router,
    prefix="/favorites",
    tags=["favorites"]
)

api_router.include_router(
    stats.router,
    tags=["stats"]
)

logger.debug("API routes configured")

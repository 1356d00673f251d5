"""
Recipe Book API Server
Recipe management, favorites, categories and photo extraction
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog
import time
from typing import AsyncGenerator

from core.config import settings
from core.database import init_db, close_db, get_db_session
from core.exceptions import RecipeBookError
from core.logging_config import configure_logging
from api.routes import api_router
from middleware.logging import LoggingMiddleware, get_request_id
from services.category_service import category_service

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Recipe Book API", environment=settings.ENVIRONMENT)

    await init_db()
    logger.info("Database connection established")

    if settings.SEED_DEFAULT_CATEGORIES:
        async with get_db_session() as session:
            await category_service.seed_default_categories(session)

    logger.info("Startup complete")

    yield

    logger.info("Shutting down Recipe Book API")
    await close_db()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Recipe book with favorites, per-user categories and recipe photo extraction",
    version=settings.VERSION,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Request-ID"]
)

app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add response time header"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RecipeBookError)
async def recipe_book_exception_handler(request: Request, exc: RecipeBookError):
    logger.info(
        "Request rejected",
        error=exc.message,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        path=request.url.path
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(ValidationError)
async def internal_validation_error_handler(request: Request, exc: ValidationError):
    """Model validation failing inside the service is a server fault, not a bad request"""
    logger.error(
        "Internal validation failed",
        model=exc.title,
        errors=exc.error_count(),
        path=request.url.path
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Flatten HTTPException details into the {"error": ...} body"""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        exception=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "request_id": get_request_id() or None
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "timestamp": time.time(),
        "version": settings.VERSION
    }


# Include API routes
app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False
    )

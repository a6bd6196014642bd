"""
Congregation Admin API - FastAPI Backend

Main application entry point with the REST API for the admin console.
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .logging_config import setup_logging
from .routers import (
    health_router,
    programs_router,
    prayer_requests_router,
    forum_router,
    jobs_router,
    users_router,
)
from .routers.responses import error_detail
from .storage import BackendFailure, NotFoundError
from . import __version__

settings = get_settings()
setup_logging(settings.log_level, debug=settings.debug)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()

    # Startup
    logger.info(
        "Starting Congregation Admin API",
        version=__version__,
        storage_type=settings.storage_type,
        cors_origins=settings.cors_origins,
    )

    # Initialize database if using SQL storage
    if settings.storage_type == "sql":
        from .db.connection import init_db
        await init_db()
        logger.info("Database initialized", database_url=settings.database_url)

    yield

    # Shutdown
    logger.info("Shutting down")
    if settings.storage_type == "sql":
        from .db.connection import close_db
        await close_db()
        logger.info("Database connection closed")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Backend API for the congregation admin console",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": error_detail("NOT_FOUND", exc.message)},
    )


@app.exception_handler(BackendFailure)
async def backend_failure_handler(request: Request, exc: BackendFailure) -> JSONResponse:
    logger.error(
        "Storage backend failure",
        operation=exc.operation,
        reason=exc.reason,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": error_detail("SERVER_ERROR", exc.message)},
    )


# Include routers
app.include_router(health_router, prefix="/api")
app.include_router(programs_router, prefix="/api")
app.include_router(prayer_requests_router, prefix="/api")
app.include_router(forum_router, prefix="/api")
app.include_router(jobs_router, prefix="/api")
app.include_router(users_router, prefix="/api")


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }

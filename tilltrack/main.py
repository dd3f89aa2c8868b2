"""
Main FastAPI application for TillTrack.
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from tilltrack.api.v1.api import api_router
from tilltrack.core.config import settings
from tilltrack.core.database import check_db_connection
from tilltrack.core.logging import configure_logging
from tilltrack.core.repository import get_repository

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting TillTrack application...")

    # Fail fast when the storage backend is unreachable
    try:
        repository = get_repository()
        repository.load_products()
    except Exception as e:
        logger.error(f"Failed to initialize storage: {e}")
        raise

    logger.info("TillTrack application started successfully", storage_backend=settings.storage_backend)

    yield

    logger.info("Shutting down TillTrack application...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Point-of-sale cart, sales recording and traffic analytics",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

# Include API routes
app.include_router(api_router, prefix=settings.api_v1_str)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to TillTrack",
        "version": "1.0.0",
        "status": "running"
    }


def storage_connected() -> bool:
    """Connection check for the configured storage backend."""
    if settings.storage_backend == "sql":
        return check_db_connection()
    if settings.storage_backend == "redis":
        from tilltrack.core.redis_client import check_redis_connection
        return check_redis_connection()
    return True


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    health_status = {
        "status": "healthy",
        "storage_backend": settings.storage_backend,
        "storage": "connected" if storage_connected() else "disconnected"
    }

    if health_status["storage"] == "disconnected":
        health_status["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tilltrack.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from api.routes import router
from api.auth_routes import router as auth_router
from config import settings
from database.mongodb import db_manager
from exceptions import (
    DecodeError,
    FitExpError,
    InvalidArgumentsError,
    UnauthorizedError,
    UpstreamUnavailableError,
)
from logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    InvalidArgumentsError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UpstreamUnavailableError: status.HTTP_502_BAD_GATEWAY,
    DecodeError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown events."""
    # Startup
    await db_manager.connect()
    yield
    # Shutdown
    await db_manager.disconnect()


app = FastAPI(
    title="fitexp API",
    description="Scores Strava workouts with EXP and posts them to Discord",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS - environment-based settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

# Add GZip middleware for response compression
app.add_middleware(GZipMiddleware, minimum_size=2048)

# Include API routes
app.include_router(router)
app.include_router(auth_router)


@app.exception_handler(FitExpError)
async def fitexp_error_handler(request: Request, exc: FitExpError):
    """Turn typed errors into a JSON error envelope."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)}
    )


@app.get("/")
async def root():
    """Root endpoint returning API status."""
    return {
        "name": "fitexp API",
        "version": "0.1.0",
        "environment": settings.environment,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    db_healthy = await db_manager.ping()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected"
    }

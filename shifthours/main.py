# shifthours/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shifthours.core.errors import AssignmentValidationError, UnknownTaskType
from shifthours.core.logging_config import get_logger, setup_logging
from shifthours.core.request_logging import RequestLoggingMiddleware
from shifthours.core.sentry_config import capture_exception, init_sentry
from shifthours.routes.assignments import router as assignments_router
from shifthours.routes.reports import router as reports_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": os.getenv("PRODUCTION", "false").lower() == "true",
                "python_version": sys.version,
            }
        },
    )

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="shift-hours",
    description="Shift and break validation, worked hours, shift and overtime reports",
    version=VERSION,
    lifespan=lifespan,
)

# CORS Configuration
IS_PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    # Production: Strict CORS - only allow specified origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST"]

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    # Development: Permissive CORS for easier testing
    allowed_origins = ["*"]
    allowed_methods = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=IS_PRODUCTION,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(reports_router)
app.include_router(assignments_router)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@app.exception_handler(AssignmentValidationError)
async def assignment_validation_handler(request: Request, exc: AssignmentValidationError):
    """Render a rejected assignment as ``{"error": {kind, message, request_id}}``."""
    status_code = 404 if isinstance(exc, UnknownTaskType) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": {**exc.to_dict(), "request_id": _request_id(request)}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    if sentry_enabled:
        capture_exception(exc, {"request": {"path": request.url.path, "request_id": _request_id(request)}})
    return JSONResponse(
        status_code=500,
        content={
            "error": {"kind": "InternalError", "message": "Internal server error", "request_id": _request_id(request)}
        },
    )


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "shift-hours", "version": VERSION}

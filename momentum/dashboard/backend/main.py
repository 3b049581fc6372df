"""
Momentum Backend - FastAPI Application

This is the main entry point for the Momentum REST API.
It provides endpoints for sign-in, voids, today's next actions,
and AI suggestions.

Usage:
    uvicorn momentum.dashboard.backend.main:app --host 127.0.0.1 --port 8080 --reload

    Or run directly:
    python -m momentum.dashboard.backend.main
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ... import __version__
from ...ai.suggestions import SuggestionError
from ...config import get_section
from ...logging_config import setup_logging
from ...security import session
from ...voids import service
from .models import ErrorResponse, HealthCheck
from .routes import api_router


setup_logging()
logger = logging.getLogger(__name__)

dashboard_config = get_section("dashboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Momentum backend...")

    # Create tables up front so the first request isn't the one paying for it
    service.get_connection().close()
    session.get_connection().close()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down Momentum backend...")


# Create FastAPI application
app = FastAPI(
    title="Momentum API",
    description="Record what you're stuck on, take one small next action, track today's progress",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
security_config = dashboard_config.get("security", {}) or {}
allowed_origins = security_config.get(
    "allowed_origins", ["http://localhost:5173", "http://127.0.0.1:5173"]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check Endpoint
# =============================================================================


@app.get("/api/health", response_model=HealthCheck, tags=["health"])
def health_check():
    """
    Check system health status.

    Returns overall health and the status of each database.
    """
    services = {}

    try:
        conn = service.get_connection()
        conn.execute("SELECT 1")
        conn.close()
        services["database"] = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        services["database"] = "unhealthy"

    try:
        conn = session.get_connection()
        conn.execute("SELECT 1")
        conn.close()
        services["sessions"] = "healthy"
    except Exception as e:
        logger.error(f"Session database health check failed: {e}")
        services["sessions"] = "unhealthy"

    overall = "healthy" if all(s == "healthy" for s in services.values()) else "degraded"

    return HealthCheck(
        status=overall,
        version=__version__,
        timestamp=datetime.now(),
        services=services,
    )


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail), code=f"HTTP_{exc.status_code}").model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SuggestionError)
async def suggestion_exception_handler(request: Request, exc: SuggestionError):
    """Bad prompts are the caller's fault; everything else is ours."""
    status_code = (
        status.HTTP_400_BAD_REQUEST
        if exc.code == "invalid-argument"
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=exc.message, code=exc.code).model_dump(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error", code="INTERNAL_ERROR").model_dump(),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(api_router)


app.state.config = dashboard_config


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    host = dashboard_config.get("host", "127.0.0.1")
    port = dashboard_config.get("api_port", 8080)

    uvicorn.run(
        "momentum.dashboard.backend.main:app", host=host, port=port, reload=True, log_level="info"
    )

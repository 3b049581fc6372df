"""Momentum API Routes Package

This module aggregates all route handlers into a single router
that can be included in the main FastAPI application.

Handlers are plain functions: they call sqlite3 and the model SDK, which
block, so FastAPI runs them in its threadpool.
"""

from fastapi import APIRouter

from .ai import router as ai_router
from .auth import router as auth_router
from .next_actions import router as next_actions_router
from .voids import router as voids_router


# Create main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(voids_router, prefix="/voids", tags=["voids"])
api_router.include_router(next_actions_router, prefix="/next-actions", tags=["next-actions"])
api_router.include_router(ai_router, prefix="/ai", tags=["ai"])

__all__ = ["api_router"]

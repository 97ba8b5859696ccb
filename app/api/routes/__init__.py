"""API routes initialization."""

from app.api.routes.experience import router as experience_router

__all__ = ["experience_router"]

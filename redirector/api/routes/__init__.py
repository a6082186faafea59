"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from redirector.api.routes import health, redirect

# Create root router
api_router = APIRouter()

# Health routes first so "/.well-known/..." never reaches the slug routes
api_router.include_router(health.router)

# Redirect routes live at the root path so slugs are available directly at /{slug}
api_router.include_router(redirect.router)

__all__ = ["api_router"]

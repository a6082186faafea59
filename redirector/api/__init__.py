"""API package for the redirect service.

This package contains the API layer components including routes
and dependency providers.
"""

from redirector.api.routes import api_router

__all__ = ["api_router"]

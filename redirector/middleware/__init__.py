"""HTTP middleware for the redirect service."""

from redirector.middleware.logging import LoggingMiddleware, add_logging_middleware

__all__ = ["LoggingMiddleware", "add_logging_middleware"]

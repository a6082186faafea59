"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from redirector.api import api_router
from redirector.api.dependencies import get_authorizer, get_redirect_repository
from redirector.core.config import settings
from redirector.core.logging import setup_logging
from redirector.middleware import add_logging_middleware

# Setup logging
logger = setup_logging()


def _resolve(app: FastAPI, dependency):
    # Honour dependency overrides so startup touches the same objects as requests
    return app.dependency_overrides.get(dependency, dependency)()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    repository = _resolve(app, get_redirect_repository)
    ensure_storage = getattr(repository, "ensure_storage", None)
    if ensure_storage is not None:
        try:
            ensure_storage()
            logger.info(f"Storing redirects in {repository.root}")
        except OSError as e:
            logger.error("Could not prepare storage directory", error=str(e))

    # Build the authorizer now so a generated secret is reported at boot
    _resolve(app, get_authorizer)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

if settings.REQUEST_LOGGING_ENABLED:
    add_logging_middleware(app)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed information."""
    logger.error(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": exc.errors()}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    error_location = f"{request.method} {request.url.path}"

    # Log detailed exception information with traceback
    logger.opt(exception=exc).error(
        "Unhandled exception in {location}",
        location=error_location,
        error_id=error_id,
        url=str(request.url),
        method=request.method,
        client_host=request.client.host if request.client else None
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Nope! Sorry.",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )

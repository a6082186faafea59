"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the redirect repository, the redirect service and the
authorization predicate.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from redirector.core.config import settings
from redirector.core.security import Authorizer, build_authorizer
from redirector.repositories import BaseRedirectRepository, FileRedirectRepository
from redirector.services import RedirectService

UNAUTHORIZED_DETAIL = "Nope! Sorry."


@lru_cache
def get_redirect_repository() -> BaseRedirectRepository:
    """Get the process-wide redirect repository.

    A single instance is shared so that its per-slug locks cover every request.
    """
    return FileRedirectRepository(settings.STORAGE_PATH)


def get_redirect_service(
    repository: BaseRedirectRepository = Depends(get_redirect_repository),
) -> RedirectService:
    """Get an instance of the redirect service."""
    return RedirectService(repository=repository)


@lru_cache
def get_authorizer() -> Authorizer:
    """Get the authorization predicate for mutating requests."""
    return build_authorizer(settings)


def require_authorization(
    request: Request,
    authorizer: Authorizer = Depends(get_authorizer),
) -> None:
    if not authorizer(request):
        logger.warning(
            "Unauthorized request",
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)


def get_home_url() -> str:
    """Get the URL that "/" redirects to."""
    return settings.HOME_URL

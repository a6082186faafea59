"""Health check endpoints for monitoring application status."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from redirector.api.dependencies import get_redirect_repository
from redirector.core.config import settings
from redirector.repositories import BaseRedirectRepository

router = APIRouter(tags=["health"])


@router.api_route(
    "/.well-known/health",
    methods=["GET", "HEAD"],
    response_class=PlainTextResponse,
    summary="Liveness probe",
)
async def health_check():
    """Simple check that application is running."""
    return "OK"


@router.get(
    "/.well-known/health/ready",
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(repository: BaseRedirectRepository = Depends(get_redirect_repository)):
    """Check that the redirect storage can serve requests."""
    components_status = {"api": True, "storage": await repository.is_ready()}
    is_ready = all(components_status.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "ready": is_ready,
            "version": settings.APP_VERSION,
            "components": components_status,
        },
    )

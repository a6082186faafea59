"""Redirect endpoints: resolve, create, update and delete slugs."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from redirector.api.dependencies import get_home_url, get_redirect_service, require_authorization
from redirector.repositories import is_valid_slug
from redirector.services import RedirectService
from redirector.services.exceptions import ErrorKind, ServiceError

router = APIRouter(tags=["redirect"])

NOT_FOUND_DETAIL = "Nope! Path does not exist."
CONFLICT_DETAIL = "Nope! Path already exists."
INVALID_DETAIL = "Nope! Invalid URL format."
GENERIC_DETAIL = "Nope! Sorry."

ERROR_RESPONSES = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, NOT_FOUND_DETAIL),
    ErrorKind.ALREADY_EXISTS: (status.HTTP_409_CONFLICT, CONFLICT_DETAIL),
    ErrorKind.INVALID_FORMAT: (status.HTTP_400_BAD_REQUEST, INVALID_DETAIL),
    ErrorKind.FAILURE: (status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_DETAIL),
}


def _http_error(exc: ServiceError) -> HTTPException:
    status_code, detail = ERROR_RESPONSES[exc.kind]
    return HTTPException(status_code=status_code, detail=detail)


def _check_slug(slug: str) -> None:
    # Anything outside [A-Za-z0-9_-] is not a route
    if not is_valid_slug(slug):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)


async def _read_target(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_DETAIL)


@router.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
async def redirect_home(home_url: str = Depends(get_home_url)):
    """Send visitors of the bare domain to the home page."""
    return RedirectResponse(url=home_url, status_code=status.HTTP_302_FOUND)


@router.api_route(
    "/{slug}",
    methods=["GET", "HEAD"],
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
)
async def redirect_to_target(
    slug: str,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Redirect to the target stored for the slug."""
    _check_slug(slug)
    try:
        target = await redirect_service.resolve(slug)
    except ServiceError as e:
        raise _http_error(e)
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)


@router.api_route(
    "/{slug}",
    methods=["POST", "PUT"],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_authorization)],
)
async def create_redirect(
    slug: str,
    request: Request,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Create a redirect; the request body is the target URL."""
    _check_slug(slug)
    target = await _read_target(request)
    try:
        await redirect_service.create(slug, target)
    except ServiceError as e:
        raise _http_error(e)
    return PlainTextResponse("Created", status_code=status.HTTP_201_CREATED)


@router.patch(
    "/{slug}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_authorization)],
)
async def update_redirect(
    slug: str,
    request: Request,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Point an existing slug at the target URL in the request body."""
    _check_slug(slug)
    target = await _read_target(request)
    try:
        await redirect_service.update(slug, target)
    except ServiceError as e:
        raise _http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{slug}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_authorization)],
)
async def delete_redirect(
    slug: str,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Remove a redirect."""
    _check_slug(slug)
    try:
        await redirect_service.delete(slug)
    except ServiceError as e:
        raise _http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Public routes: form-based shortening and short link redirects."""

from typing import Optional

from fastapi import APIRouter, Request, Form, status
from fastapi.responses import RedirectResponse

from shortener.errors import NotFound
from shortener.common.validators import is_valid_code
from ..api.routes import build_link_response
from ..api.schemas import LinkResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/shorten",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or too long URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "Link capacity reached"},
    },
    summary="Create short URL from a form",
)
async def shorten_form(request: Request, url: Optional[str] = Form(None)):
    """Handle form submission (field `url`) to create a short link."""
    service = request.app.state.service

    link = await service.shorten(url)

    return build_link_response(request, link)


@router.get(
    "/{code}",
    responses={
        303: {"description": "Redirect to the original URL"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short link expired"},
    },
    summary="Follow a short link",
)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the original URL."""
    if not is_valid_code(code):
        raise NotFound()

    service = request.app.state.service

    target = await service.resolve(code)

    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)

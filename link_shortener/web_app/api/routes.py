"""API routes implementation."""

from fastapi import APIRouter, Request
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    LinkResponse,
    LinkInfoResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortener.store.models import Link
from shortener.common.url_builder import build_short_url
from shortener.common.headers import build_base_url, resolve_path_prefix

router = APIRouter()


def build_link_response(request: Request, link: Link) -> LinkResponse:
    """Render a link with its absolute short URL for this request."""
    config = request.app.state.config

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    short_url = build_short_url(
        code=link.code,
        base_url=base_url,
        path_prefix=resolve_path_prefix(request.headers, config.path_prefix),
    )

    return LinkResponse(
        id=link.id,
        short_link=link.code,
        full_link=link.target,
        created_at=link.created_at,
        expires_at=link.expires_at,
        short_url=short_url,
    )


@router.post(
    "/shorten",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or too long URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "Link capacity reached"},
    },
    summary="Create short URL",
    description="Shorten a URL given as JSON. A URL that was already shortened returns its existing link.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create (or reuse) a short link from a JSON body."""
    service = request.app.state.service

    link = await service.shorten(body.url)

    return build_link_response(request, link)


@router.get(
    "/links/{code}",
    response_model=LinkInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get link information",
    description="Get a short link record and whether it is still active.",
)
async def get_link_info(request: Request, code: str):
    """Get information about a short link."""
    service = request.app.state.service

    link = await service.get_link(code)

    return LinkInfoResponse(
        **build_link_response(request, link).model_dump(),
        status=service.status_of(link),
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get link counts and remaining capacity.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
